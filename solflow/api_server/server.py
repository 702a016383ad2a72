"""
FastAPI server: read-only JSON over live Helius data.

GET /wallets/analysis fetches and analyzes 1-3 wallets per request and returns
the per-wallet reports with 1h/6h/24h windows and the 3-day hourly trend
evaluated at request time. Nothing is stored between requests.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from pydantic import BaseModel, Field

from solflow import __version__
from solflow.analytics.analytics_pipeline import current_time_ms
from solflow.config.settings import Settings, get_settings
from solflow.core.exceptions import ConfigError
from solflow.dashboard.runner import MAX_TRACKED_WALLETS, run_dashboard
from solflow.solflow_logging import get_logger
from solflow.utils.wallet_utils import is_valid_wallet

logger = get_logger(__name__)

app = FastAPI(title="SolFlow", version=__version__)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = Field("ok", description="Service status")
    version: str = Field(__version__, description="SolFlow version")


class WalletReportResponse(BaseModel):
    """One tracked wallet: analysis or an error message, plus holdings."""

    wallet: str = Field(..., description="Wallet address (base58)")
    error: str = Field("", description="Fetch/empty-state message; empty when analysis is present")
    analysis: dict[str, Any] | None = Field(None, description="Flow analysis with windows and hourly trend")
    holdings: dict[str, Any] | None = Field(None, description="SOL balance and fungible tokens")
    holdings_error: str = Field("", description="Holdings lookup message")


class AnalysisResponse(BaseModel):
    generated_at: int = Field(..., description="Epoch ms the windows were evaluated at")
    wallets: list[WalletReportResponse]


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


@app.get("/wallets/analysis", response_model=AnalysisResponse)
async def wallets_analysis(
    wallet: list[str] = Query(..., description=f"1-{MAX_TRACKED_WALLETS} wallet addresses"),
    x_helius_api_key: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> AnalysisResponse:
    invalid = [w for w in wallet if w.strip() and not is_valid_wallet(w)]
    if invalid:
        raise HTTPException(status_code=422, detail=f"Invalid Solana wallet: {invalid[0]}")

    settings = settings.with_api_key(x_helius_api_key)
    now_ms = current_time_ms()
    try:
        reports = await run_dashboard(wallet, settings, now_ms=now_ms)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info("api_wallets_analysis", wallet_count=len(reports))
    return AnalysisResponse(
        generated_at=now_ms,
        wallets=[WalletReportResponse(**r.to_dict(now_ms, settings.timezone)) for r in reports],
    )
