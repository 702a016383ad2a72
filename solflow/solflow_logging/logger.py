"""
Structured logging for SolFlow.

One structlog configuration applied on first import: log level, UTC ISO
timestamp, the event name under `event_type`, rendered as JSON (LOG_FORMAT=json,
default) or as colored console lines. Records go to stderr so the CLI's
--json output on stdout stays machine-readable.

Per-wallet work logs through bind_wallet() so every record of one wallet's
fetch and analysis carries the same full `wallet_id`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _rename_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Move structlog's positional 'event' to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(
    level: str = LOG_LEVEL,
    fmt: str = LOG_FORMAT,
    stream: TextIO | None = None,
) -> None:
    """(Re)configure structlog for SolFlow; called once at import with env defaults."""
    out = stream or sys.stderr
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.format_exc_info,
            _rename_event,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Structured logger for a module; the name is bound as `logger`.

        logger = get_logger(__name__)
        logger.info("helius_transactions_loaded", wallet_id=addr, tx_count=120)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet_id: str, name: str = "solflow") -> structlog.BoundLogger:
    """Logger for `name` with the tracked wallet bound as wallet_id."""
    return get_logger(name).bind(wallet_id=wallet_id)
