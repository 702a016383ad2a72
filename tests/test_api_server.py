"""
Tests for the FastAPI server. run_dashboard is replaced so no request leaves the process.
"""

from __future__ import annotations

from datetime import timezone

import pytest
from fastapi.testclient import TestClient

from solflow.analytics import analyze_wallet
from solflow.api_server import server
from solflow.config.settings import Settings, get_settings
from solflow.core.exceptions import ConfigError
from solflow.dashboard.runner import NO_TRANSACTIONS_MESSAGE, WalletReport

from conftest import NOW_MS, TRACKED_WALLET, build_tx

OTHER = "3Katmm9dhvLQijAvomteYGQ5RWrMkzRMnNEipMoV3p8X"


def _settings(api_key: str = "") -> Settings:
    return Settings(
        helius_api_key=api_key,
        helius_api_base="https://api.test/v0",
        helius_rpc_url="https://rpc.test",
        lookback_days=15,
        max_pages=20,
        page_delay_sec=0,
        request_timeout_sec=5,
        timezone=timezone.utc,
    )


@pytest.fixture
def client():
    server.app.dependency_overrides[get_settings] = lambda: _settings()
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    async def fake_run_dashboard(wallets, settings, now_ms=None, transport=None):
        calls["wallets"] = wallets
        calls["settings"] = settings
        if not settings.helius_api_key:
            raise ConfigError("Helius API key is required")
        tx = build_tx(NOW_MS // 1000, native=[(1_000_000_000, OTHER, TRACKED_WALLET)])
        return [
            WalletReport(wallet=wallets[0], analysis=analyze_wallet(wallets[0], [tx], now_ms=NOW_MS, tz=timezone.utc)),
            *[WalletReport(wallet=w, error=NO_TRANSACTIONS_MESSAGE) for w in wallets[1:]],
        ]

    monkeypatch.setattr(server, "run_dashboard", fake_run_dashboard)
    return calls


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_missing_api_key_returns_400(client, captured):
    resp = client.get("/wallets/analysis", params={"wallet": TRACKED_WALLET})
    assert resp.status_code == 400
    assert "API key" in resp.json()["detail"]


def test_invalid_wallet_returns_422(client, captured):
    resp = client.get(
        "/wallets/analysis",
        params={"wallet": "not-a-wallet"},
        headers={"X-Helius-Api-Key": "k"},
    )
    assert resp.status_code == 422
    assert "wallets" not in captured


def test_analysis_payload(client, captured):
    resp = client.get(
        "/wallets/analysis",
        params=[("wallet", TRACKED_WALLET), ("wallet", OTHER)],
        headers={"X-Helius-Api-Key": "header-key"},
    )
    assert resp.status_code == 200
    assert captured["wallets"] == [TRACKED_WALLET, OTHER]
    assert captured["settings"].helius_api_key == "header-key"

    body = resp.json()
    assert isinstance(body["generated_at"], int)
    first, second = body["wallets"]
    assert first["wallet"] == TRACKED_WALLET
    assert first["analysis"]["unique_wallets"] == 1
    assert set(first["analysis"]["windows"]) == {"1h", "6h", "24h"}
    assert second["analysis"] is None
    assert second["error"] == NO_TRANSACTIONS_MESSAGE
