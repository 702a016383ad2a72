"""
Daily bucketizer: fixed trailing window of calendar-day in/out totals.

Day keys are ISO dates (yyyy-mm-dd) of the timestamp in the given time zone
(None = the machine's local zone), so the window's day boundaries and each
transaction's key always agree. The window is always DAILY_WINDOW_DAYS long,
oldest first, ending with the day containing `now_ms`; days without activity
stay zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from solflow.analytics.models import DailyBucket, TransferDirection
from solflow.analytics.transfer_classifier import classify_native_transfer
from solflow.helius.models import HeliusTransaction

DAILY_WINDOW_DAYS = 15


def local_datetime(timestamp_ms: int, tz: tzinfo | None = None) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz)


def day_key(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    return local_datetime(timestamp_ms, tz).date().isoformat()


def trailing_day_keys(
    now_ms: int,
    tz: tzinfo | None = None,
    days: int = DAILY_WINDOW_DAYS,
) -> list[str]:
    """`days` consecutive ISO dates ending today, oldest first."""
    today = local_datetime(now_ms, tz).date()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def init_daily_buckets(now_ms: int, tz: tzinfo | None = None) -> dict[str, DailyBucket]:
    """Zeroed buckets keyed by date, in oldest-to-newest insertion order."""
    return {key: DailyBucket(date=key) for key in trailing_day_keys(now_ms, tz)}


@dataclass
class DailySeries:
    """Bucketizer output: the daily buckets and each input transaction's day key."""

    buckets: list[DailyBucket]
    tx_day_keys: list[str]

    @property
    def day_keys(self) -> list[str]:
        return [b.date for b in self.buckets]


def bucketize_daily(
    transactions: list[HeliusTransaction],
    wallet: str,
    now_ms: int,
    tz: tzinfo | None = None,
) -> DailySeries:
    """
    Count transactions per day and add native SOL flows to the matching bucket.

    Transactions whose day falls outside the window get a day key but leave the
    buckets untouched. Token transfers never contribute to the daily series.
    """
    by_date = init_daily_buckets(now_ms, tz)
    tx_day_keys: list[str] = []
    for tx in transactions:
        key = day_key(tx.timestamp_ms, tz)
        tx_day_keys.append(key)
        bucket = by_date.get(key)
        if bucket is None:
            continue
        bucket.tx_count += 1
        for nt in tx.native_transfers:
            outcome = classify_native_transfer(nt, wallet)
            if outcome.direction is TransferDirection.INCOMING:
                bucket.incoming += nt.sol
            elif outcome.direction is TransferDirection.OUTGOING:
                bucket.outgoing += nt.sol
    return DailySeries(buckets=list(by_date.values()), tx_day_keys=tx_day_keys)
