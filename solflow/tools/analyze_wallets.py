"""
Fetch and analyze up to three wallets from the command line.

Prints one summary block per wallet (15-day totals, counterparties, 1h/6h/24h
windows, peak hour) or the full JSON payload with --json.

Usage:
  python -m solflow.tools.analyze_wallets WALLET [WALLET WALLET] [--api-key KEY] [--json]
"""

from __future__ import annotations

import argparse
import json

from solflow.analytics.analytics_pipeline import current_time_ms
from solflow.config.env import load_solflow_env
from solflow.config.settings import get_settings
from solflow.core.exceptions import ConfigError
from solflow.dashboard.runner import WalletReport, analysis_payload, analyze_tracked_wallets
from solflow.solflow_logging import get_logger
from solflow.utils.wallet_utils import short_address

logger = get_logger(__name__)


def _print_report(report: WalletReport, now_ms: int, tz) -> None:
    print(f"[solflow] wallet {report.wallet}")
    if report.error:
        print(f"[solflow]   error: {report.error}")
    if report.analysis is not None:
        a = report.analysis
        payload = analysis_payload(a, now_ms, tz)
        print(
            f"[solflow]   15d in={a.total_in:.4f} SOL out={a.total_out:.4f} SOL "
            f"tx={a.total_tx} counterparties={a.unique_wallets} tokens={a.total_tokens}"
        )
        for name, window in payload["windows"].items():
            print(
                f"[solflow]   {name:>3}: in={window['incoming']:.4f} out={window['outgoing']:.4f} "
                f"net={window['net']:.4f} events={window['tx_count']} wallets={window['wallet_count']}"
            )
        trend = payload["hourly_trend"]
        if trend["total_count"]:
            print(
                f"[solflow]   peak hour {trend['peak_hour']['label']} ({trend['peak_hour']['count']}), "
                f"quiet hour {trend['quiet_hour']['label']} ({trend['quiet_hour']['count']})"
            )
        for cp in a.counterparties[:5]:
            print(
                f"[solflow]   {short_address(cp.address)} count={cp.count} "
                f"days={cp.active_days} in={cp.incoming_sol:.4f} out={cp.outgoing_sol:.4f}"
            )
    if report.holdings is not None:
        print(f"[solflow]   balance {report.holdings.sol:.4f} SOL, {len(report.holdings.tokens)} tokens")
    elif report.holdings_error:
        print(f"[solflow]   holdings: {report.holdings_error}")


def main(argv: list[str] | None = None) -> int:
    load_solflow_env()
    ap = argparse.ArgumentParser(description="Analyze Solana wallet flows via Helius")
    ap.add_argument("wallets", nargs="+", help="1-3 wallet addresses")
    ap.add_argument("--api-key", type=str, default="", help="Helius API key (default: HELIUS_API_KEY)")
    ap.add_argument("--json", action="store_true", help="Print the full JSON payload")
    args = ap.parse_args(argv)

    settings = get_settings().with_api_key(args.api_key)
    now_ms = current_time_ms()
    try:
        reports = analyze_tracked_wallets(args.wallets, settings, now_ms=now_ms)
    except ConfigError as e:
        print("[solflow] ERROR:", e)
        return 1

    if args.json:
        print(json.dumps([r.to_dict(now_ms, settings.timezone) for r in reports], indent=2))
    else:
        for report in reports:
            _print_report(report, now_ms, settings.timezone)

    analyzed = sum(1 for r in reports if r.ok)
    logger.info("analyze_wallets_done", wallet_count=len(reports), analyzed=analyzed)
    return 0 if analyzed else 1


if __name__ == "__main__":
    raise SystemExit(main())
