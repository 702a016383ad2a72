"""
Analytics pipeline: one wallet's transactions -> WalletAnalysis.

Single entrypoint for the dashboard runner, API and CLI. Runs the daily
bucketizer once, classifies every native and token transfer, aggregates
qualifying ones per counterparty, and builds the recurrence histogram from
the full counterparty map before the display list is truncated.

Input is expected to be pre-filtered to the lookback by the Helius client;
older transactions still feed counterparties and raw events. An empty list
yields an all-zero result, never an error.
"""

from __future__ import annotations

import time
from datetime import tzinfo
from typing import Any, Iterable

from solflow.analytics.counterparties import (
    NATIVE_TOKEN_LABEL,
    UNKNOWN_TOKEN_LABEL,
    accumulate,
    distinct_token_labels,
    summarize_counterparties,
)
from solflow.analytics.daily_buckets import bucketize_daily
from solflow.analytics.models import (
    CounterpartyStats,
    FlowEvent,
    TransferDirection,
    WalletAnalysis,
)
from solflow.analytics.recurrence import build_recurrence
from solflow.analytics.transfer_classifier import (
    classify_native_transfer,
    classify_token_transfer,
)
from solflow.helius.models import HeliusTransaction
from solflow.solflow_logging import bind_wallet
from solflow.utils.wallet_utils import short_address


def current_time_ms() -> int:
    return int(time.time() * 1000)


def _as_transaction(tx: HeliusTransaction | dict[str, Any]) -> HeliusTransaction:
    if isinstance(tx, HeliusTransaction):
        return tx
    return HeliusTransaction.from_api_item(tx)


def token_label(mint: str | None) -> str:
    return short_address(mint) if mint else UNKNOWN_TOKEN_LABEL


def analyze_wallet(
    wallet: str,
    transactions: Iterable[HeliusTransaction | dict[str, Any]],
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> WalletAnalysis:
    """
    Build the per-wallet result from a transaction list.

    now_ms anchors the 15-day window (defaults to the current time); tz sets the
    day boundary (None = local time). Deterministic for fixed now_ms and tz.
    """
    wallet = (wallet or "").strip()
    if now_ms is None:
        now_ms = current_time_ms()
    txs = [_as_transaction(tx) for tx in transactions]

    series = bucketize_daily(txs, wallet, now_ms, tz)
    counterparties: dict[str, CounterpartyStats] = {}
    raw_events: list[FlowEvent] = []

    for tx, dk in zip(txs, series.tx_day_keys):
        ts = tx.timestamp_ms
        for nt in tx.native_transfers:
            outcome = classify_native_transfer(nt, wallet)
            if not outcome.is_relevant:
                continue
            sol = nt.sol
            incoming = sol if outcome.direction is TransferDirection.INCOMING else 0.0
            outgoing = sol if outcome.direction is TransferDirection.OUTGOING else 0.0
            accumulate(counterparties, outcome.counterparty, dk, incoming, outgoing, NATIVE_TOKEN_LABEL)
            raw_events.append(FlowEvent(ts, incoming, outgoing, outcome.counterparty))

        for tt in tx.token_transfers:
            outcome = classify_token_transfer(tt, wallet)
            if not outcome.is_relevant:
                continue
            accumulate(counterparties, outcome.counterparty, dk, 0.0, 0.0, token_label(tt.mint))
            raw_events.append(FlowEvent(ts, 0.0, 0.0, outcome.counterparty, token_only=True))

    daily = series.buckets
    result = WalletAnalysis(
        wallet=wallet,
        daily_data=daily,
        counterparties=summarize_counterparties(counterparties, series.day_keys),
        recurrence=build_recurrence(counterparties.values()),
        raw_events=raw_events,
        total_in=sum(d.incoming for d in daily),
        total_out=sum(d.outgoing for d in daily),
        total_tx=sum(d.tx_count for d in daily),
        unique_wallets=len(counterparties),
        total_tokens=len(distinct_token_labels(counterparties)),
    )
    bind_wallet(wallet, __name__).info(
        "analytics_pipeline_done",
        tx_count=len(txs),
        event_count=len(raw_events),
        unique_wallets=result.unique_wallets,
    )
    return result
