"""
Counterparty aggregation for one analysis pass.

accumulate() grows a dict of CounterpartyStats keyed by address; nothing is
ever removed. summarize_counterparties() turns the finished map into result
rows, most active first, truncated to the display limit.
"""

from __future__ import annotations

from solflow.analytics.models import (
    CounterpartyDay,
    CounterpartyStats,
    CounterpartySummary,
    DayFlow,
    TokenVolume,
)

MAX_COUNTERPARTIES = 30
NATIVE_TOKEN_LABEL = "SOL"
UNKNOWN_TOKEN_LABEL = "Token"


def accumulate(
    counterparties: dict[str, CounterpartyStats],
    address: str,
    day_key: str,
    incoming: float,
    outgoing: float,
    token_label: str | None = None,
) -> CounterpartyStats:
    """Record one qualifying transfer with `address` on `day_key`."""
    stats = counterparties.get(address)
    if stats is None:
        stats = CounterpartyStats(address=address)
        counterparties[address] = stats
    stats.count += 1
    stats.total_sol += incoming + outgoing
    stats.incoming_sol += incoming
    stats.outgoing_sol += outgoing
    stats.days.add(day_key)
    day = stats.per_day.get(day_key)
    if day is None:
        day = DayFlow()
        stats.per_day[day_key] = day
    day.incoming += incoming
    day.outgoing += outgoing
    if token_label:
        stats.tokens[token_label] = stats.tokens.get(token_label, 0.0) + incoming + outgoing
    return stats


def summarize(stats: CounterpartyStats, day_keys: list[str]) -> CounterpartySummary:
    tokens = sorted(
        (TokenVolume(name=name, volume=volume) for name, volume in stats.tokens.items()),
        key=lambda t: t.volume,
        reverse=True,
    )
    daily = []
    for key in day_keys:
        flow = stats.per_day.get(key)
        daily.append(
            CounterpartyDay(
                date=key,
                incoming=flow.incoming if flow else 0.0,
                outgoing=flow.outgoing if flow else 0.0,
            )
        )
    return CounterpartySummary(
        address=stats.address,
        count=stats.count,
        total_sol=stats.total_sol,
        incoming_sol=stats.incoming_sol,
        outgoing_sol=stats.outgoing_sol,
        active_days=stats.active_days,
        tokens=tokens,
        daily=daily,
    )


def summarize_counterparties(
    counterparties: dict[str, CounterpartyStats],
    day_keys: list[str],
    limit: int = MAX_COUNTERPARTIES,
) -> list[CounterpartySummary]:
    """Rows sorted by transfer count descending (first-seen order on ties), top `limit`."""
    ranked = sorted(counterparties.values(), key=lambda c: c.count, reverse=True)
    return [summarize(c, day_keys) for c in ranked[:limit]]


def distinct_token_labels(counterparties: dict[str, CounterpartyStats]) -> set[str]:
    labels: set[str] = set()
    for stats in counterparties.values():
        labels.update(stats.tokens)
    return labels
