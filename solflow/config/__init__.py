"""
Configuration management for SolFlow.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for fetch limits, endpoints and time zone.
"""

from solflow.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
