"""
Time-window analyzer over raw flow events.

compute_window() filters events to [now_ms - duration_ms, ...], sums flows,
ranks counterparties by event count and spreads the window over fixed
sub-interval buckets (5 minutes for windows up to an hour, hourly otherwise).
It reads nothing but its arguments, so repeated calls with an advancing
now_ms are the expected refresh pattern.
"""

from __future__ import annotations

from typing import Iterable

from solflow.analytics.models import FlowEvent, TopWallet, WindowBucket, WindowResult

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000

FINE_BUCKET_MS = 5 * MS_PER_MINUTE
COARSE_BUCKET_MS = MS_PER_HOUR
TOP_WALLETS_LIMIT = 5

# Panels shown per wallet
WINDOW_PRESETS: dict[str, int] = {
    "1h": MS_PER_HOUR,
    "6h": 6 * MS_PER_HOUR,
    "24h": MS_PER_DAY,
}


def bucket_size_ms(duration_ms: int) -> int:
    return FINE_BUCKET_MS if duration_ms <= MS_PER_HOUR else COARSE_BUCKET_MS


def events_since(events: Iterable[FlowEvent], cutoff_ms: int) -> list[FlowEvent]:
    """Events at or after cutoff_ms (inclusive lower bound)."""
    return [e for e in events if e.timestamp_ms >= cutoff_ms]


def _top_wallets(events: list[FlowEvent], limit: int) -> tuple[list[TopWallet], int]:
    counts: dict[str, int] = {}
    for e in events:
        counts[e.counterparty] = counts.get(e.counterparty, 0) + 1
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    top = []
    for address, _ in ranked:
        own = [e for e in events if e.counterparty == address]
        top.append(
            TopWallet(
                address=address,
                incoming=sum(e.incoming for e in own),
                outgoing=sum(e.outgoing for e in own),
                count=len(own),
            )
        )
    return top, len(counts)


def _buckets(events: list[FlowEvent], start_ms: int, duration_ms: int) -> list[WindowBucket]:
    size = bucket_size_ms(duration_ms)
    n = max(0, -(-duration_ms // size))
    buckets = [WindowBucket(time=start_ms + i * size) for i in range(n)]
    for e in events:
        i = min((e.timestamp_ms - start_ms) // size, n - 1)
        if i >= 0:
            buckets[i].incoming += e.incoming
            buckets[i].outgoing += e.outgoing
    return buckets


def compute_window(
    raw_events: Iterable[FlowEvent],
    duration_ms: int,
    now_ms: int,
) -> WindowResult:
    """Aggregate flow for the trailing duration_ms ending at now_ms."""
    start_ms = now_ms - duration_ms
    events = events_since(raw_events, start_ms)
    incoming = sum(e.incoming for e in events)
    outgoing = sum(e.outgoing for e in events)
    top, wallet_count = _top_wallets(events, TOP_WALLETS_LIMIT)
    return WindowResult(
        duration_ms=duration_ms,
        incoming=incoming,
        outgoing=outgoing,
        net=incoming - outgoing,
        tx_count=len(events),
        wallet_count=wallet_count,
        top_wallets=top,
        buckets=_buckets(events, start_ms, duration_ms),
    )


def compute_preset_windows(raw_events: Iterable[FlowEvent], now_ms: int) -> dict[str, WindowResult]:
    """1h / 6h / 24h panels evaluated against the same now_ms."""
    events = list(raw_events)
    return {name: compute_window(events, ms, now_ms) for name, ms in WINDOW_PRESETS.items()}
