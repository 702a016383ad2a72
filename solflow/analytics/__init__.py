"""
SolFlow analytics engine.

Turns a wallet's Helius transactions into daily flow, counterparty,
recurrence, time-window and hourly-trend views.
Modules: transfer_classifier, counterparties, daily_buckets, recurrence,
time_window, hourly_trend, analytics_pipeline.
"""

from solflow.analytics.analytics_pipeline import analyze_wallet
from solflow.analytics.hourly_trend import compute_hourly_trend
from solflow.analytics.recurrence import build_recurrence, recurrence_breakdown
from solflow.analytics.time_window import WINDOW_PRESETS, compute_preset_windows, compute_window

__all__ = [
    "WINDOW_PRESETS",
    "analyze_wallet",
    "build_recurrence",
    "compute_hourly_trend",
    "compute_preset_windows",
    "compute_window",
    "recurrence_breakdown",
]
