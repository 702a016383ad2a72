"""
Hour-of-day activity trend over the last three days.

Events are grouped by the local hour of their timestamp (0-23); the same hour
on different days lands in the same bucket, so this is a 24-point profile,
not a 72-point series.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Iterable

from solflow.analytics.daily_buckets import local_datetime
from solflow.analytics.models import FlowEvent, HourlyBucket, HourlyTrend
from solflow.analytics.time_window import MS_PER_DAY, events_since

TREND_LOOKBACK_DAYS = 3
HOURS_PER_DAY = 24


def compute_hourly_trend(
    raw_events: Iterable[FlowEvent],
    now_ms: int,
    tz: tzinfo | None = None,
    lookback_days: int = TREND_LOOKBACK_DAYS,
) -> HourlyTrend:
    """
    Count/incoming/outgoing per hour of day for events in the lookback.

    peak_hour and quiet_hour are the highest and lowest count; ties go to the
    earliest hour.
    """
    events = events_since(raw_events, now_ms - lookback_days * MS_PER_DAY)
    by_hour = [HourlyBucket(hour=h) for h in range(HOURS_PER_DAY)]
    for e in events:
        bucket = by_hour[local_datetime(e.timestamp_ms, tz).hour]
        bucket.count += 1
        bucket.incoming += e.incoming
        bucket.outgoing += e.outgoing

    ranked = sorted(by_hour, key=lambda b: b.count, reverse=True)
    return HourlyTrend(
        by_hour=by_hour,
        ranked=ranked,
        total_count=len(events),
        peak_hour=ranked[0],
        quiet_hour=min(by_hour, key=lambda b: b.count),
    )
