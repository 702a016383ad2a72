"""
Data models for wallet flow analysis.

Flow events, counterparty accumulators and summaries, daily buckets,
recurrence entries, time-window and hourly-trend results, and the composed
per-wallet WalletAnalysis. All derived; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransferDirection(str, Enum):
    """Direction of a transfer relative to the tracked wallet."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
    IRRELEVANT = "irrelevant"


@dataclass(frozen=True)
class TransferClassification:
    """Classifier outcome; counterparty is None when direction is IRRELEVANT."""

    direction: TransferDirection
    counterparty: str | None = None

    @property
    def is_relevant(self) -> bool:
        return self.direction is not TransferDirection.IRRELEVANT


IRRELEVANT = TransferClassification(TransferDirection.IRRELEVANT)


@dataclass(frozen=True)
class FlowEvent:
    """
    One qualifying transfer seen from the tracked wallet.

    Native events carry exactly one nonzero amount (SOL); token-only events
    carry zero amounts and count only toward event/counterparty totals.
    """

    timestamp_ms: int
    incoming: float
    outgoing: float
    counterparty: str
    token_only: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.timestamp_ms,
            "incoming": self.incoming,
            "outgoing": self.outgoing,
            "counterparty": self.counterparty,
            "token_only": self.token_only,
        }


@dataclass
class DayFlow:
    incoming: float = 0.0
    outgoing: float = 0.0


@dataclass
class CounterpartyStats:
    """
    Mutable per-counterparty accumulator, owned by a single analysis pass.

    count: qualifying transfers (native and token) with the tracked wallet.
    days: day keys with at least one transfer.
    tokens: token label -> cumulative incoming + outgoing (SOL and raw token
    units are summed into the same scalar per label).
    """

    address: str
    count: int = 0
    total_sol: float = 0.0
    incoming_sol: float = 0.0
    outgoing_sol: float = 0.0
    days: set[str] = field(default_factory=set)
    per_day: dict[str, DayFlow] = field(default_factory=dict)
    tokens: dict[str, float] = field(default_factory=dict)

    @property
    def active_days(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class TokenVolume:
    name: str
    volume: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "volume": self.volume}


@dataclass(frozen=True)
class CounterpartyDay:
    date: str
    incoming: float
    outgoing: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "incoming": self.incoming, "outgoing": self.outgoing}


@dataclass(frozen=True)
class CounterpartySummary:
    """Finalized counterparty row as shown in the result (top 30 by count)."""

    address: str
    count: int
    total_sol: float
    incoming_sol: float
    outgoing_sol: float
    active_days: int
    tokens: list[TokenVolume]
    daily: list[CounterpartyDay]

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "count": self.count,
            "total_sol": self.total_sol,
            "incoming_sol": self.incoming_sol,
            "outgoing_sol": self.outgoing_sol,
            "active_days": self.active_days,
            "tokens": [t.to_dict() for t in self.tokens],
            "daily": [d.to_dict() for d in self.daily],
        }


@dataclass
class DailyBucket:
    """One calendar day of the trailing window (date is an ISO yyyy-mm-dd key)."""

    date: str
    incoming: float = 0.0
    outgoing: float = 0.0
    tx_count: int = 0

    @property
    def net(self) -> float:
        return self.incoming - self.outgoing

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "incoming": self.incoming,
            "outgoing": self.outgoing,
            "tx_count": self.tx_count,
        }


@dataclass(frozen=True)
class RecurrenceEntry:
    """Number of counterparties active on exactly `days` days."""

    days: int
    wallets: int

    @property
    def label(self) -> str:
        return f"{self.days}d"

    def to_dict(self) -> dict[str, Any]:
        return {"days": self.days, "label": self.label, "wallets": self.wallets}


@dataclass(frozen=True)
class TopWallet:
    address: str
    incoming: float
    outgoing: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "incoming": self.incoming,
            "outgoing": self.outgoing,
            "count": self.count,
        }


@dataclass
class WindowBucket:
    """Sub-interval starting at `time` (ms since epoch)."""

    time: int
    incoming: float = 0.0
    outgoing: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"time": self.time, "incoming": self.incoming, "outgoing": self.outgoing}


@dataclass(frozen=True)
class WindowResult:
    """Flow totals over [now - duration, now], recomputed on every call."""

    duration_ms: int
    incoming: float
    outgoing: float
    net: float
    tx_count: int
    wallet_count: int
    top_wallets: list[TopWallet]
    buckets: list[WindowBucket]

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration_ms": self.duration_ms,
            "incoming": self.incoming,
            "outgoing": self.outgoing,
            "net": self.net,
            "tx_count": self.tx_count,
            "wallet_count": self.wallet_count,
            "top_wallets": [w.to_dict() for w in self.top_wallets],
            "buckets": [b.to_dict() for b in self.buckets],
        }


@dataclass
class HourlyBucket:
    hour: int
    count: int = 0
    incoming: float = 0.0
    outgoing: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:00"

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "label": self.label,
            "count": self.count,
            "incoming": self.incoming,
            "outgoing": self.outgoing,
        }


@dataclass(frozen=True)
class HourlyTrend:
    """Hour-of-day aggregate over the lookback; ranked is by_hour sorted by count desc."""

    by_hour: list[HourlyBucket]
    ranked: list[HourlyBucket]
    total_count: int
    peak_hour: HourlyBucket
    quiet_hour: HourlyBucket

    def to_dict(self) -> dict[str, Any]:
        return {
            "by_hour": [h.to_dict() for h in self.by_hour],
            "ranked": [h.to_dict() for h in self.ranked],
            "total_count": self.total_count,
            "peak_hour": self.peak_hour.to_dict(),
            "quiet_hour": self.quiet_hour.to_dict(),
        }


@dataclass
class WalletAnalysis:
    """
    Composed per-wallet result.

    total_in / total_out / total_tx are sums over daily_data; unique_wallets and
    total_tokens count every counterparty and token label seen, before the
    counterparty list is truncated.
    """

    wallet: str
    daily_data: list[DailyBucket]
    counterparties: list[CounterpartySummary]
    recurrence: list[RecurrenceEntry]
    raw_events: list[FlowEvent]
    total_in: float
    total_out: float
    total_tx: int
    unique_wallets: int
    total_tokens: int

    def net_flow(self) -> list[dict[str, Any]]:
        """Daily series with net = incoming - outgoing rounded to 4 decimals."""
        return [{**d.to_dict(), "net": round(d.net, 4)} for d in self.daily_data]

    def top_by_active_days(self, limit: int = 10) -> list[CounterpartySummary]:
        return sorted(self.counterparties, key=lambda c: c.active_days, reverse=True)[:limit]

    def to_dict(self, include_raw_events: bool = True) -> dict[str, Any]:
        out: dict[str, Any] = {
            "wallet": self.wallet,
            "daily_data": [d.to_dict() for d in self.daily_data],
            "counterparties": [c.to_dict() for c in self.counterparties],
            "recurrence": [r.to_dict() for r in self.recurrence],
            "total_in": self.total_in,
            "total_out": self.total_out,
            "total_tx": self.total_tx,
            "unique_wallets": self.unique_wallets,
            "total_tokens": self.total_tokens,
        }
        if include_raw_events:
            out["raw_events"] = [e.to_dict() for e in self.raw_events]
        return out
