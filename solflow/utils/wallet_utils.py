"""Wallet address helpers."""

from solders.pubkey import Pubkey


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid Solana wallet (Pubkey) address."""
    try:
        Pubkey.from_string(w.strip())
        return True
    except Exception:
        return False


def short_address(address: str | None) -> str:
    """First 4 and last 4 characters joined by an ellipsis ("abcd…wxyz")."""
    if not address:
        return ""
    return address[:4] + "…" + address[-4:]
