"""
Application settings.

Collects the env-derived values from config.env into one frozen dataclass
used by the Helius client, dashboard runner, API server and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import tzinfo

from solflow.config.env import (
    get_helius_api_base,
    get_helius_api_key,
    get_helius_rpc_url,
    get_lookback_days,
    get_max_pages,
    get_page_delay_sec,
    get_request_timeout_sec,
    get_timezone,
)


@dataclass(frozen=True)
class Settings:
    """Typed view of SolFlow configuration."""

    helius_api_key: str
    helius_api_base: str
    helius_rpc_url: str
    lookback_days: int
    max_pages: int
    page_delay_sec: float
    request_timeout_sec: float
    timezone: tzinfo | None = None

    def with_api_key(self, api_key: str | None) -> "Settings":
        """Return a copy using api_key when it is non-empty."""
        key = (api_key or "").strip()
        if not key:
            return self
        return replace(self, helius_api_key=key)


def get_settings() -> Settings:
    """Return the current application settings (read from env on each call)."""
    return Settings(
        helius_api_key=get_helius_api_key(),
        helius_api_base=get_helius_api_base(),
        helius_rpc_url=get_helius_rpc_url(),
        lookback_days=get_lookback_days(),
        max_pages=get_max_pages(),
        page_delay_sec=get_page_delay_sec(),
        request_timeout_sec=get_request_timeout_sec(),
        timezone=get_timezone(),
    )
