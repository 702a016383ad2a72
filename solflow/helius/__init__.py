"""
Helius collaborator: enhanced-transaction paging and holdings lookup.
"""

from solflow.helius.client import HeliusClient, parse_holdings
from solflow.helius.models import (
    Holdings,
    HeliusTransaction,
    NativeTransfer,
    TokenHolding,
    TokenTransfer,
)

__all__ = [
    "HeliusClient",
    "Holdings",
    "HeliusTransaction",
    "NativeTransfer",
    "TokenHolding",
    "TokenTransfer",
    "parse_holdings",
]
