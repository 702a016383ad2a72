"""
Recurrence distribution: how many counterparties were active on exactly N days.

build_recurrence() is a pure function of the counterparty map and must run
before the counterparty list is truncated for display, so its mass always
equals the number of distinct counterparties.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from solflow.analytics.daily_buckets import DAILY_WINDOW_DAYS
from solflow.analytics.models import CounterpartyStats, RecurrenceEntry

BREAKDOWN_SINGLE_ROWS = 10
RETURNING_MAX_DAYS = 4


def build_recurrence(
    counterparties: Iterable[CounterpartyStats],
    max_days: int = DAILY_WINDOW_DAYS,
) -> list[RecurrenceEntry]:
    """Dense list for N = 1..max_days; a record above max_days counts in the last entry."""
    counts = [0] * max_days
    for stats in counterparties:
        n = stats.active_days
        if n < 1:
            continue
        counts[min(n, max_days) - 1] += 1
    return [RecurrenceEntry(days=i + 1, wallets=counts[i]) for i in range(max_days)]


def _pct(part: int, total: int, digits: int) -> float:
    return round(part / total * 100, digits)


@dataclass(frozen=True)
class BreakdownRow:
    label: str
    wallets: int
    pct: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "wallets": self.wallets, "pct": self.pct}


@dataclass(frozen=True)
class RecurrenceBreakdown:
    """Rows for 1..10 days plus a grouped 11-15 day row; one-time/returning/frequent split."""

    rows: list[BreakdownRow]
    one_time: int
    returning: int
    frequent: int
    one_time_pct: float
    returning_pct: float
    frequent_pct: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "one_time": self.one_time,
            "returning": self.returning,
            "frequent": self.frequent,
            "one_time_pct": self.one_time_pct,
            "returning_pct": self.returning_pct,
            "frequent_pct": self.frequent_pct,
        }


def recurrence_breakdown(recurrence: list[RecurrenceEntry], unique_wallets: int) -> RecurrenceBreakdown:
    # Guard the percentage denominator for wallets with no counterparties
    total = unique_wallets or 1
    wallets = [r.wallets for r in recurrence]

    rows = []
    for d in range(1, BREAKDOWN_SINGLE_ROWS + 1):
        w = wallets[d - 1] if d - 1 < len(wallets) else 0
        rows.append(BreakdownRow(label=f"{d}-day", wallets=w, pct=_pct(w, total, 1)))
    rest = sum(wallets[BREAKDOWN_SINGLE_ROWS:])
    rows.append(
        BreakdownRow(
            label=f"{BREAKDOWN_SINGLE_ROWS + 1}-{len(wallets)}d",
            wallets=rest,
            pct=_pct(rest, total, 1),
        )
    )

    one_time = wallets[0] if wallets else 0
    returning = sum(wallets[1:RETURNING_MAX_DAYS])
    frequent = sum(wallets[RETURNING_MAX_DAYS:])
    return RecurrenceBreakdown(
        rows=rows,
        one_time=one_time,
        returning=returning,
        frequent=frequent,
        one_time_pct=_pct(one_time, total, 0),
        returning_pct=_pct(returning, total, 0),
        frequent_pct=_pct(frequent, total, 0),
    )
