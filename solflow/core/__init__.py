"""
Core: shared exceptions.
"""

from solflow.core.exceptions import (
    ConfigError,
    HeliusAuthError,
    HeliusError,
    HoldingsError,
    SolflowError,
)

__all__ = [
    "ConfigError",
    "HeliusAuthError",
    "HeliusError",
    "HoldingsError",
    "SolflowError",
]
