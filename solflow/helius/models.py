"""
Data models for Helius responses.

Enhanced transactions (nativeTransfers / tokenTransfers) and wallet holdings.
Built from the raw JSON with from_api_item(); consumed by the analytics core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LAMPORTS_PER_SOL = 1_000_000_000


def as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class NativeTransfer:
    """SOL movement inside a transaction; amount in lamports."""

    amount: int
    from_user_account: str | None
    to_user_account: str | None

    @property
    def sol(self) -> float:
        return self.amount / LAMPORTS_PER_SOL

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "NativeTransfer":
        return cls(
            amount=as_int(item.get("amount")),
            from_user_account=item.get("fromUserAccount"),
            to_user_account=item.get("toUserAccount"),
        )


@dataclass(frozen=True)
class TokenTransfer:
    """SPL token movement; token_amount is already decimal-adjusted by Helius."""

    token_amount: float
    from_user_account: str | None
    to_user_account: str | None
    mint: str | None = None

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "TokenTransfer":
        return cls(
            token_amount=as_float(item.get("tokenAmount")),
            from_user_account=item.get("fromUserAccount"),
            to_user_account=item.get("toUserAccount"),
            mint=item.get("mint"),
        )


@dataclass(frozen=True)
class HeliusTransaction:
    """
    One enhanced transaction from GET /addresses/{wallet}/transactions.

    timestamp is Unix seconds; transfers keep the order Helius returned them in.
    """

    timestamp: int
    signature: str | None = None
    native_transfers: tuple[NativeTransfer, ...] = ()
    token_transfers: tuple[TokenTransfer, ...] = ()

    @property
    def timestamp_ms(self) -> int:
        return self.timestamp * 1000

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "HeliusTransaction":
        """Build from a single enhanced-transaction JSON object."""
        return cls(
            timestamp=as_int(item.get("timestamp")),
            signature=item.get("signature"),
            native_transfers=tuple(
                NativeTransfer.from_api_item(nt)
                for nt in item.get("nativeTransfers") or []
                if isinstance(nt, dict)
            ),
            token_transfers=tuple(
                TokenTransfer.from_api_item(tt)
                for tt in item.get("tokenTransfers") or []
                if isinstance(tt, dict)
            ),
        )


@dataclass(frozen=True)
class TokenHolding:
    """Fungible token balance; display_balance = balance / 10**decimals."""

    mint: str
    name: str
    symbol: str
    balance: int
    decimals: int
    display_balance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "mint": self.mint,
            "name": self.name,
            "symbol": self.symbol,
            "balance": self.balance,
            "decimals": self.decimals,
            "display_balance": self.display_balance,
        }


@dataclass
class Holdings:
    """SOL balance plus fungible tokens, largest display balance first. Display only."""

    sol: float
    tokens: list[TokenHolding] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sol": self.sol,
            "tokens": [t.to_dict() for t in self.tokens],
        }
