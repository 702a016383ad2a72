"""
Environment variable loading for SolFlow.

- HELIUS_API_KEY: Helius API key (CLI flag / API header override it)
- HELIUS_API_BASE: enhanced transactions REST base (default https://api.helius.xyz/v0)
- HELIUS_RPC_URL: Helius JSON-RPC endpoint used for balance and assets
- SOLFLOW_LOOKBACK_DAYS, SOLFLOW_MAX_PAGES, SOLFLOW_PAGE_DELAY_SEC,
  SOLFLOW_REQUEST_TIMEOUT_SEC: fetch limits
- SOLFLOW_TIMEZONE: IANA zone for day keys and hour-of-day (unset = local time)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Project root: config is solflow/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_HELIUS_API_BASE = "https://api.helius.xyz/v0"
DEFAULT_HELIUS_RPC_URL = "https://mainnet.helius-rpc.com"
DEFAULT_LOOKBACK_DAYS = 15
DEFAULT_MAX_PAGES = 20
DEFAULT_PAGE_DELAY_SEC = 0.2
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0


def load_solflow_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_helius_api_key() -> str:
    """Return HELIUS_API_KEY from env, or empty string."""
    load_solflow_env()
    return _env_str("HELIUS_API_KEY")


def get_helius_api_base() -> str:
    load_solflow_env()
    return _env_str("HELIUS_API_BASE", DEFAULT_HELIUS_API_BASE).rstrip("/")


def get_helius_rpc_url() -> str:
    load_solflow_env()
    return _env_str("HELIUS_RPC_URL", DEFAULT_HELIUS_RPC_URL).rstrip("/")


def get_lookback_days() -> int:
    load_solflow_env()
    return max(1, _env_int("SOLFLOW_LOOKBACK_DAYS", DEFAULT_LOOKBACK_DAYS))


def get_max_pages() -> int:
    load_solflow_env()
    return max(1, _env_int("SOLFLOW_MAX_PAGES", DEFAULT_MAX_PAGES))


def get_page_delay_sec() -> float:
    load_solflow_env()
    return max(0.0, _env_float("SOLFLOW_PAGE_DELAY_SEC", DEFAULT_PAGE_DELAY_SEC))


def get_request_timeout_sec() -> float:
    load_solflow_env()
    return _env_float("SOLFLOW_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC)


def get_timezone() -> tzinfo | None:
    """
    Return the configured SOLFLOW_TIMEZONE, or None for the machine's local zone.
    An unknown zone name falls back to local time.
    """
    load_solflow_env()
    name = _env_str("SOLFLOW_TIMEZONE")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def mask_api_key(url: str) -> str:
    """Mask api-key query value for logging."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
