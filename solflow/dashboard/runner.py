"""
Dashboard runner: fetch-then-analyze for up to three tracked wallets.

Each wallet runs as its own asyncio task over a shared Helius client; a
wallet's pages are fetched in order, wallets proceed concurrently. Failures
are isolated per wallet and reported as messages on its WalletReport: a bad
key or HTTP error for one wallet, or missing holdings, never aborts the rest.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

import httpx

from solflow.analytics.analytics_pipeline import analyze_wallet, current_time_ms
from solflow.analytics.hourly_trend import compute_hourly_trend
from solflow.analytics.models import WalletAnalysis
from solflow.analytics.recurrence import recurrence_breakdown
from solflow.analytics.time_window import compute_preset_windows
from solflow.config.settings import Settings
from solflow.core.exceptions import ConfigError, HeliusError
from solflow.helius.client import HeliusClient
from solflow.helius.models import Holdings
from solflow.solflow_logging import bind_wallet, get_logger

logger = get_logger(__name__)

MAX_TRACKED_WALLETS = 3
NO_TRANSACTIONS_MESSAGE = "No transactions in last 15 days."
FETCH_FAILED_MESSAGE = "Fetch failed"
HOLDINGS_FAILED_MESSAGE = "Could not load token holdings"


@dataclass
class WalletReport:
    """Outcome for one tracked wallet; analysis is None when error is set."""

    wallet: str
    analysis: WalletAnalysis | None = None
    error: str = ""
    holdings: Holdings | None = None
    holdings_error: str = ""

    @property
    def ok(self) -> bool:
        return self.analysis is not None

    def to_dict(self, now_ms: int, tz: tzinfo | None = None) -> dict[str, Any]:
        return {
            "wallet": self.wallet,
            "error": self.error,
            "analysis": analysis_payload(self.analysis, now_ms, tz) if self.analysis else None,
            "holdings": self.holdings.to_dict() if self.holdings else None,
            "holdings_error": self.holdings_error,
        }


def analysis_payload(analysis: WalletAnalysis, now_ms: int, tz: tzinfo | None = None) -> dict[str, Any]:
    """Orchestrator result plus the on-demand views, all evaluated at now_ms."""
    out = analysis.to_dict()
    out["windows"] = {
        name: window.to_dict()
        for name, window in compute_preset_windows(analysis.raw_events, now_ms).items()
    }
    out["hourly_trend"] = compute_hourly_trend(analysis.raw_events, now_ms, tz).to_dict()
    out["recurrence_breakdown"] = recurrence_breakdown(
        analysis.recurrence, analysis.unique_wallets
    ).to_dict()
    out["net_flow"] = analysis.net_flow()
    out["top_by_active_days"] = [c.to_dict() for c in analysis.top_by_active_days()]
    return out


def normalize_wallets(wallets: list[str]) -> list[str]:
    """Strip blanks; raise ConfigError when none remain or more than three are given."""
    filled = [w.strip() for w in wallets if w and w.strip()]
    if not filled:
        raise ConfigError("Enter at least one wallet address")
    if len(filled) > MAX_TRACKED_WALLETS:
        raise ConfigError(f"At most {MAX_TRACKED_WALLETS} wallets can be tracked")
    return filled


async def _process_wallet(
    client: HeliusClient,
    wallet: str,
    now_ms: int,
    tz: tzinfo | None,
) -> WalletReport:
    log = bind_wallet(wallet, __name__)
    report = WalletReport(wallet=wallet)

    try:
        txs = await client.fetch_transactions(
            wallet, now_ms, on_progress=lambda msg: log.debug("wallet_fetch_progress", progress=msg)
        )
        if not txs:
            report.error = NO_TRANSACTIONS_MESSAGE
        else:
            report.analysis = analyze_wallet(wallet, txs, now_ms=now_ms, tz=tz)
    except HeliusError as e:
        log.warning("wallet_fetch_failed", error=str(e), status_code=e.status_code)
        report.error = str(e) or FETCH_FAILED_MESSAGE
    except Exception as e:
        log.exception("wallet_analysis_failed", error=str(e))
        report.error = FETCH_FAILED_MESSAGE

    try:
        report.holdings = await client.fetch_holdings(wallet)
    except HeliusError as e:
        log.warning("wallet_holdings_failed", error=str(e), status_code=e.status_code)
        report.holdings_error = HOLDINGS_FAILED_MESSAGE
    except Exception as e:
        log.exception("wallet_holdings_failed", error=str(e))
        report.holdings_error = HOLDINGS_FAILED_MESSAGE

    return report


async def run_dashboard(
    wallets: list[str],
    settings: Settings,
    now_ms: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[WalletReport]:
    """
    Fetch and analyze every tracked wallet; reports keep the input order.

    Raises ConfigError for a missing API key or an invalid wallet list; all
    per-wallet failures are captured in the reports instead.
    """
    filled = normalize_wallets(wallets)
    if not settings.helius_api_key:
        raise ConfigError("Helius API key is required")
    if now_ms is None:
        now_ms = current_time_ms()

    logger.info("dashboard_run_start", wallet_count=len(filled))
    async with HeliusClient.from_settings(settings, transport=transport) as client:
        reports = await asyncio.gather(
            *(_process_wallet(client, w, now_ms, settings.timezone) for w in filled)
        )
    logger.info(
        "dashboard_run_done",
        wallet_count=len(reports),
        analyzed=sum(1 for r in reports if r.ok),
    )
    return list(reports)


def analyze_tracked_wallets(
    wallets: list[str],
    settings: Settings,
    now_ms: int | None = None,
) -> list[WalletReport]:
    """Blocking wrapper around run_dashboard() for scripts."""
    return asyncio.run(run_dashboard(wallets, settings, now_ms=now_ms))
