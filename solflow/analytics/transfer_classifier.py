"""
Transfer classifier: direction and counterparty of a transfer for the tracked wallet.

A transfer is INCOMING when the wallet receives (counterparty = sender) and
OUTGOING when it sends (counterparty = receiver). It is IRRELEVANT when the
wallet is on neither end, on both ends, the other end is missing, or the
amount is below the dust threshold.
"""

from __future__ import annotations

from solflow.analytics.models import (
    IRRELEVANT,
    TransferClassification,
    TransferDirection,
)
from solflow.helius.models import NativeTransfer, TokenTransfer

# Native amounts compare in SOL, token amounts in raw token units
DUST_THRESHOLD = 1e-6


def _classify(
    amount: float,
    sender: str | None,
    receiver: str | None,
    wallet: str,
) -> TransferClassification:
    if amount < DUST_THRESHOLD:
        return IRRELEVANT
    if receiver == wallet:
        direction, counterparty = TransferDirection.INCOMING, sender
    elif sender == wallet:
        direction, counterparty = TransferDirection.OUTGOING, receiver
    else:
        return IRRELEVANT
    if not counterparty or counterparty == wallet:
        return IRRELEVANT
    return TransferClassification(direction, counterparty)


def classify_native_transfer(transfer: NativeTransfer, wallet: str) -> TransferClassification:
    return _classify(transfer.sol, transfer.from_user_account, transfer.to_user_account, wallet)


def classify_token_transfer(transfer: TokenTransfer, wallet: str) -> TransferClassification:
    return _classify(transfer.token_amount, transfer.from_user_account, transfer.to_user_account, wallet)
