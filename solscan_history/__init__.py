"""
Solscan history — transaction and balance-change history for one Solana account.

Fetches pages from the Solscan Pro API, normalizes the two response shapes into
a single row format, filters by date range, and summarizes / exports the result.
"""

__version__ = "0.1.0"
