"""
SolFlow: wallet flow analytics for Solana.

Turns Helius enhanced-transaction history for up to three tracked wallets
into daily in/out series, counterparty recurrence, time-window flow panels
and hour-of-day activity trends. Fetching, analysis and the read-only API
are kept in separate subpackages.
"""

__version__ = "0.1.0"
