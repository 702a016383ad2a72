"""
Application-level exceptions.

The analytics core raises none of these; they belong to the Helius fetch
layer and to callers that validate input (API server, CLI).
"""

from __future__ import annotations


class SolflowError(Exception):
    """Base class for SolFlow errors."""


class ConfigError(SolflowError):
    """Missing API key, too many wallets, or other unusable input."""


class HeliusError(SolflowError):
    """Transport failure or non-2xx response from Helius."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HeliusAuthError(HeliusError):
    """Helius rejected the API key (401/403)."""

    def __init__(self, status_code: int | None = None) -> None:
        super().__init__("Invalid Helius API key", status_code=status_code)


class HoldingsError(HeliusError):
    """Balance or asset lookup failed."""
