"""
Pytest fixtures for SolFlow tests.

A fixed clock (2025-06-15 12:00 UTC) and UTC day boundaries keep every
analysis deterministic. make_tx builds Helius enhanced-transaction JSON;
demo_transactions generates a reproducible 15-day history for property tests.
"""

from __future__ import annotations

import random
from datetime import timezone

import pytest

NOW_MS = 1_749_988_800_000  # 2025-06-15T12:00:00Z
TRACKED_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
DEMO_COUNTERPARTIES = [
    "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
    "3Katmm9dhvLQijAvomteYGQ5RWrMkzRMnNEipMoV3p8X",
    "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM",
    "DfMxnfZzWqLBqGAm2x3Mh9Rz8vQy5UphJ7F4kLNa3V57",
    "HN7cABqLq46Es1jh92dQQisAi5YqpLGj7RZFfFRTfYnk",
    "CuieVDEDtLo7FypA9SbLM9saXFdb1dsshEkySnMrnzDG",
    "3xxDCjN8s6MgNHwdRWGSmTtSQMoS4aQh6sBJJBkEdWfQ",
]
DEMO_MINTS = [
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
]


def build_tx(
    timestamp: int,
    native: list[tuple[int, str, str]] | None = None,
    tokens: list[tuple[float, str, str, str | None]] | None = None,
    signature: str | None = None,
) -> dict:
    """Enhanced-transaction dict; native = (lamports, from, to), tokens = (amount, from, to, mint)."""
    return {
        "signature": signature or f"sig{timestamp}",
        "timestamp": timestamp,
        "nativeTransfers": [
            {"amount": a, "fromUserAccount": f, "toUserAccount": t} for a, f, t in (native or [])
        ],
        "tokenTransfers": [
            {"tokenAmount": a, "fromUserAccount": f, "toUserAccount": t, "mint": m}
            for a, f, t, m in (tokens or [])
        ],
    }


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def wallet() -> str:
    return TRACKED_WALLET


@pytest.fixture
def make_tx():
    return build_tx


@pytest.fixture
def demo_transactions() -> list[dict]:
    """200 transactions between 2025-06-01 00:00 UTC and now, newest first, seeded."""
    rng = random.Random(7)
    now_s = NOW_MS // 1000
    txs = []
    for _ in range(200):
        ts = now_s - rng.randint(0, 14 * 86400 + 12 * 3600)
        cp = rng.choice(DEMO_COUNTERPARTIES)
        lamports = rng.randint(1, 5_000_000_000)
        native = [(lamports, cp, TRACKED_WALLET) if rng.random() < 0.5 else (lamports, TRACKED_WALLET, cp)]
        tokens = []
        if rng.random() < 0.3:
            tokens.append((round(rng.uniform(0.5, 500.0), 4), rng.choice(DEMO_COUNTERPARTIES), TRACKED_WALLET, rng.choice(DEMO_MINTS)))
        txs.append(build_tx(ts, native=native, tokens=tokens))
    txs.sort(key=lambda t: t["timestamp"], reverse=True)
    return txs
