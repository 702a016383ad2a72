"""
Tests for counterparty accumulation and summarization.
"""

from __future__ import annotations

import pytest

from solflow.analytics.counterparties import (
    accumulate,
    distinct_token_labels,
    summarize_counterparties,
)

DAY_KEYS = ["2025-06-13", "2025-06-14", "2025-06-15"]


def test_accumulate_creates_and_grows_record():
    cps = {}
    accumulate(cps, "A", "2025-06-14", 2.0, 0.0, "SOL")
    accumulate(cps, "A", "2025-06-15", 0.0, 0.5, "SOL")
    accumulate(cps, "A", "2025-06-15", 0.0, 0.0, "EPjF…Dt1v")

    a = cps["A"]
    assert a.count == 3
    assert a.incoming_sol == pytest.approx(2.0)
    assert a.outgoing_sol == pytest.approx(0.5)
    assert a.total_sol == pytest.approx(2.5)
    assert a.days == {"2025-06-14", "2025-06-15"}
    assert a.per_day["2025-06-15"].outgoing == pytest.approx(0.5)
    assert a.tokens == {"SOL": pytest.approx(2.5), "EPjF…Dt1v": 0.0}


def test_token_volume_mixes_units_per_label():
    """Token volume adds incoming + outgoing whatever unit the caller passes."""
    cps = {}
    accumulate(cps, "A", "2025-06-15", 3.0, 0.0, "USDC")
    accumulate(cps, "A", "2025-06-15", 0.0, 1.0, "USDC")
    assert cps["A"].tokens["USDC"] == pytest.approx(4.0)


def test_summarize_sorts_by_count_and_truncates():
    cps = {}
    for i in range(35):
        for _ in range(i % 4 + 1):
            accumulate(cps, f"cp{i:02d}", "2025-06-15", 0.1, 0.0, "SOL")
    rows = summarize_counterparties(cps, DAY_KEYS)
    assert len(rows) == 30
    counts = [r.count for r in rows]
    assert counts == sorted(counts, reverse=True)
    # first-seen order among equal counts
    assert rows[0].address == "cp03"
    assert rows[1].address == "cp07"


def test_summary_row_daily_series_and_tokens():
    cps = {}
    accumulate(cps, "A", "2025-06-14", 1.0, 0.0, "SOL")
    accumulate(cps, "A", "2025-06-14", 0.0, 0.0, "BONK")
    accumulate(cps, "A", "2025-06-15", 0.0, 4.0, "SOL")
    [row] = summarize_counterparties(cps, DAY_KEYS)
    assert row.active_days == 2
    assert [d.date for d in row.daily] == DAY_KEYS
    assert [(d.incoming, d.outgoing) for d in row.daily] == [(0.0, 0.0), (1.0, 0.0), (0.0, 4.0)]
    assert [t.name for t in row.tokens] == ["SOL", "BONK"]


def test_distinct_token_labels():
    cps = {}
    accumulate(cps, "A", "2025-06-15", 1.0, 0.0, "SOL")
    accumulate(cps, "B", "2025-06-15", 0.0, 0.0, "USDC")
    accumulate(cps, "B", "2025-06-15", 0.0, 1.0, "SOL")
    assert distinct_token_labels(cps) == {"SOL", "USDC"}
