"""
Helius fetch client: enhanced transactions and wallet holdings.

Responsibilities:
- Page through GET /addresses/{wallet}/transactions newest-first, stopping at the
  lookback cutoff, an empty or short page, or the page ceiling.
- Fetch SOL balance (getBalance) and fungible assets (getAssetsByOwner) over JSON-RPC.
- Map 401/403 to HeliusAuthError and other failures to HeliusError / HoldingsError.

Pages of one wallet are fetched strictly in order: each request's `before`
cursor is the last signature of the previous page.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx

from solflow.config.env import mask_api_key
from solflow.config.settings import Settings
from solflow.core.exceptions import HeliusAuthError, HeliusError, HoldingsError
from solflow.helius.models import (
    LAMPORTS_PER_SOL,
    Holdings,
    HeliusTransaction,
    TokenHolding,
    as_int,
)
from solflow.solflow_logging import get_logger
from solflow.utils.wallet_utils import short_address

logger = get_logger(__name__)

PAGE_LIMIT = 100
MS_PER_DAY = 86_400_000
ASSETS_PAGE_LIMIT = 1000
FUNGIBLE_INTERFACES = frozenset({"FungibleToken", "FungibleAsset"})

ProgressCallback = Callable[[str], None]


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    logger.warning(
        "helius_request_failed",
        status_code=resp.status_code,
        url=mask_api_key(str(resp.request.url)),
    )
    if resp.status_code in (401, 403):
        raise HeliusAuthError(status_code=resp.status_code)
    raise HeliusError(f"Helius error {resp.status_code}", status_code=resp.status_code)


def _obj(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_holdings(balance_json: dict[str, Any], assets_json: dict[str, Any]) -> Holdings:
    """
    Build Holdings from getBalance and getAssetsByOwner JSON-RPC bodies.

    Fields of the wrong shape or type read as missing, so a malformed asset is
    skipped rather than failing the whole lookup.
    """
    sol = as_int(_obj(_obj(balance_json).get("result")).get("value")) / LAMPORTS_PER_SOL

    items = _obj(_obj(assets_json).get("result")).get("items")
    tokens: list[TokenHolding] = []
    for asset in items if isinstance(items, list) else []:
        if not isinstance(asset, dict):
            continue
        if asset.get("interface") not in FUNGIBLE_INTERFACES:
            continue
        info = _obj(asset.get("token_info"))
        balance = as_int(info.get("balance"))
        if balance <= 0:
            continue
        decimals = max(0, as_int(info.get("decimals")))
        metadata = _obj(_obj(asset.get("content")).get("metadata"))
        mint = str(asset.get("id") or "")
        tokens.append(
            TokenHolding(
                mint=mint,
                name=metadata.get("name") or "Unknown",
                symbol=metadata.get("symbol") or short_address(mint),
                balance=balance,
                decimals=decimals,
                display_balance=balance / (10 ** decimals),
            )
        )
    tokens.sort(key=lambda t: t.display_balance, reverse=True)
    return Holdings(sol=sol, tokens=tokens)


class HeliusClient:
    """
    Async Helius client for one API key.

    Use as an async context manager, or pass an existing httpx.AsyncClient
    (the caller then owns its lifecycle). `transport` is forwarded to the
    internally created client, which lets tests plug in httpx.MockTransport.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str,
        rpc_url: str,
        lookback_days: int = 15,
        max_pages: int = 20,
        page_delay_sec: float = 0.2,
        request_timeout_sec: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key.strip():
            raise ValueError("api_key must be non-empty")
        self._api_key = api_key.strip()
        self._api_base = api_base.rstrip("/")
        self._rpc_url = rpc_url.rstrip("/")
        self._lookback_days = lookback_days
        self._max_pages = max_pages
        self._page_delay_sec = page_delay_sec
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(request_timeout_sec),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HeliusClient":
        return cls(
            settings.helius_api_key,
            api_base=settings.helius_api_base,
            rpc_url=settings.helius_rpc_url,
            lookback_days=settings.lookback_days,
            max_pages=settings.max_pages,
            page_delay_sec=settings.page_delay_sec,
            request_timeout_sec=settings.request_timeout_sec,
            transport=transport,
        )

    async def __aenter__(self) -> "HeliusClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_page(self, wallet: str, before: str | None) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"api-key": self._api_key, "limit": PAGE_LIMIT}
        if before:
            params["before"] = before
        url = f"{self._api_base}/addresses/{wallet}/transactions"
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise HeliusError(f"Helius request failed: {e}") from e
        _raise_for_status(resp)
        data = resp.json()
        return data if isinstance(data, list) else []

    async def fetch_transactions(
        self,
        wallet: str,
        now_ms: int,
        on_progress: ProgressCallback | None = None,
    ) -> list[HeliusTransaction]:
        """
        Fetch all transactions newer than now_ms minus the lookback, newest first.

        Raises HeliusAuthError on 401/403 and HeliusError on other failures.
        """
        cutoff_ms = now_ms - self._lookback_days * MS_PER_DAY
        out: list[HeliusTransaction] = []
        before: str | None = None
        page = 0
        while True:
            page += 1
            if on_progress:
                on_progress(f"Fetching page {page}…")
            items = await self._get_page(wallet, before)
            if not items:
                break
            reached_cutoff = False
            for item in items:
                if not isinstance(item, dict):
                    continue
                tx = HeliusTransaction.from_api_item(item)
                if tx.timestamp_ms < cutoff_ms:
                    reached_cutoff = True
                    break
                out.append(tx)
            if reached_cutoff or len(items) < PAGE_LIMIT:
                break
            last = items[-1]
            before = last.get("signature") if isinstance(last, dict) else None
            if not before:
                break
            await asyncio.sleep(self._page_delay_sec)
            if page > self._max_pages:
                logger.warning("helius_page_ceiling_reached", wallet_id=wallet, pages=page)
                break
        logger.info("helius_transactions_loaded", wallet_id=wallet, tx_count=len(out), pages=page)
        if on_progress:
            on_progress(f"{len(out)} transactions loaded.")
        return out

    async def _rpc(self, rpc_id: str, method: str, params: Any) -> dict[str, Any]:
        body = {"jsonrpc": "2.0", "id": rpc_id, "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, params={"api-key": self._api_key}, json=body)
        except httpx.HTTPError as e:
            raise HoldingsError(f"{method} request failed: {e}") from e
        if not resp.is_success:
            label = "Balance" if method == "getBalance" else "Assets"
            raise HoldingsError(f"{label} fetch failed: {resp.status_code}", status_code=resp.status_code)
        data = resp.json()
        return data if isinstance(data, dict) else {}

    async def fetch_holdings(self, wallet: str) -> Holdings:
        """SOL balance and fungible token holdings; sequential calls to stay under RPC rate limits."""
        balance_json = await self._rpc("sol-bal", "getBalance", [wallet])
        assets_json = await self._rpc(
            "das-assets",
            "getAssetsByOwner",
            {
                "ownerAddress": wallet,
                "displayOptions": {"showFungible": True, "showNativeBalance": False},
                "page": 1,
                "limit": ASSETS_PAGE_LIMIT,
            },
        )
        holdings = parse_holdings(balance_json, assets_json)
        logger.debug("helius_holdings_loaded", wallet_id=wallet, token_count=len(holdings.tokens))
        return holdings
