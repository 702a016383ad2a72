"""
Multi-wallet dashboard runner: fetch, analyze and collect per-wallet reports.
"""

from solflow.dashboard.runner import (
    MAX_TRACKED_WALLETS,
    WalletReport,
    analysis_payload,
    analyze_tracked_wallets,
    run_dashboard,
)

__all__ = [
    "MAX_TRACKED_WALLETS",
    "WalletReport",
    "analysis_payload",
    "analyze_tracked_wallets",
    "run_dashboard",
]
