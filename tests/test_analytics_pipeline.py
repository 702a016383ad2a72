"""
End-to-end tests for analyze_wallet on hand-built and generated histories.
"""

from __future__ import annotations

import pytest

from solflow.analytics import analyze_wallet
from solflow.analytics.time_window import compute_window, MS_PER_DAY
from solflow.helius.models import HeliusTransaction

X = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def test_empty_history_is_all_zero(wallet, now_ms, utc):
    result = analyze_wallet(wallet, [], now_ms=now_ms, tz=utc)
    assert result.total_in == 0
    assert result.total_out == 0
    assert result.total_tx == 0
    assert result.unique_wallets == 0
    assert result.total_tokens == 0
    assert len(result.daily_data) == 15
    assert all(d.tx_count == 0 for d in result.daily_data)
    assert result.counterparties == []
    assert [r.wallets for r in result.recurrence] == [0] * 15
    assert result.raw_events == []


def test_single_incoming_transfer_today(wallet, now_ms, utc, make_tx):
    tx = make_tx(now_ms // 1000 - 30, native=[(2_000_000_000, X, wallet)])
    result = analyze_wallet(wallet, [tx], now_ms=now_ms, tz=utc)
    today = result.daily_data[-1]
    assert today.date == "2025-06-15"
    assert today.incoming == pytest.approx(2.0)
    [cp] = result.counterparties
    assert cp.address == X
    assert cp.count == 1
    assert cp.incoming_sol == pytest.approx(2.0)
    assert cp.active_days == 1
    assert result.recurrence[0].wallets == 1
    assert result.raw_events[0].timestamp_ms == (now_ms // 1000 - 30) * 1000


def test_three_active_days_move_recurrence_by_one(wallet, now_ms, utc, make_tx):
    other = "3Katmm9dhvLQijAvomteYGQ5RWrMkzRMnNEipMoV3p8X"
    base = [make_tx(now_ms // 1000 - 100, native=[(1_000_000_000, other, wallet)])]
    extra = [make_tx(now_ms // 1000 - d * 86400, native=[(1_000_000_000, X, wallet)]) for d in (1, 2, 3)]

    without = analyze_wallet(wallet, base, now_ms=now_ms, tz=utc)
    with_x = analyze_wallet(wallet, base + extra, now_ms=now_ms, tz=utc)
    assert with_x.recurrence[2].wallets == without.recurrence[2].wallets + 1
    assert [r.wallets for i, r in enumerate(with_x.recurrence) if i != 2] == [
        r.wallets for i, r in enumerate(without.recurrence) if i != 2
    ]


def test_dust_is_excluded_everywhere(wallet, now_ms, utc, make_tx):
    tx = make_tx(now_ms // 1000, native=[(999, X, wallet)])
    result = analyze_wallet(wallet, [tx], now_ms=now_ms, tz=utc)
    assert result.total_in == 0
    assert result.total_tx == 1
    assert result.counterparties == []
    assert result.unique_wallets == 0
    assert result.raw_events == []


def test_token_transfer_counts_without_volume(wallet, now_ms, utc, make_tx):
    tx = make_tx(now_ms // 1000, tokens=[(250.0, X, wallet, USDC), (1.0, X, wallet, None)])
    result = analyze_wallet(wallet, [tx], now_ms=now_ms, tz=utc)
    [cp] = result.counterparties
    assert cp.count == 2
    assert cp.total_sol == 0
    assert {t.name for t in cp.tokens} == {"EPjF…Dt1v", "Token"}
    assert result.total_tokens == 2
    assert all(e.token_only and e.incoming == 0 and e.outgoing == 0 for e in result.raw_events)
    assert compute_window(result.raw_events, MS_PER_DAY, now_ms).tx_count == 2


def test_self_transfer_is_ignored(wallet, now_ms, utc, make_tx):
    tx = make_tx(now_ms // 1000, native=[(3_000_000_000, wallet, wallet)])
    result = analyze_wallet(wallet, [tx], now_ms=now_ms, tz=utc)
    assert result.total_in == 0
    assert result.total_out == 0
    assert result.unique_wallets == 0


def test_accepts_parsed_transactions(wallet, now_ms, utc, make_tx):
    raw = [make_tx(now_ms // 1000, native=[(1_000_000_000, wallet, X)])]
    parsed = [HeliusTransaction.from_api_item(t) for t in raw]
    assert analyze_wallet(wallet, raw, now_ms=now_ms, tz=utc) == analyze_wallet(wallet, parsed, now_ms=now_ms, tz=utc)


def test_generated_history_invariants(wallet, now_ms, utc, demo_transactions):
    result = analyze_wallet(wallet, demo_transactions, now_ms=now_ms, tz=utc)

    assert result.total_in == pytest.approx(sum(d.incoming for d in result.daily_data))
    assert result.total_out == pytest.approx(sum(d.outgoing for d in result.daily_data))
    assert result.total_tx == len(demo_transactions)

    # recurrence covers every counterparty, not just the displayed ones
    assert sum(r.wallets for r in result.recurrence) == result.unique_wallets
    assert len(result.counterparties) <= 30
    for cp in result.counterparties:
        assert 1 <= cp.active_days <= 15
        assert cp.count >= cp.active_days
        assert cp.total_sol == pytest.approx(cp.incoming_sol + cp.outgoing_sol)

    counts = [cp.count for cp in result.counterparties]
    assert counts == sorted(counts, reverse=True)

    native_in = sum(e.incoming for e in result.raw_events)
    assert native_in == pytest.approx(result.total_in)


def test_result_is_deterministic(wallet, now_ms, utc, demo_transactions):
    first = analyze_wallet(wallet, demo_transactions, now_ms=now_ms, tz=utc)
    second = analyze_wallet(wallet, list(demo_transactions), now_ms=now_ms, tz=utc)
    assert first.to_dict() == second.to_dict()


def test_net_flow_and_active_day_ranking(wallet, now_ms, utc, demo_transactions):
    result = analyze_wallet(wallet, demo_transactions, now_ms=now_ms, tz=utc)
    net = result.net_flow()
    assert [n["date"] for n in net] == [d.date for d in result.daily_data]
    assert all(n["net"] == round(n["incoming"] - n["outgoing"], 4) for n in net)
    top = result.top_by_active_days(limit=3)
    assert len(top) == min(3, len(result.counterparties))
    assert [c.active_days for c in top] == sorted((c.active_days for c in top), reverse=True)
