"""
Solscan API package.

HTTP client for the account endpoints, the `beforeHash` transaction
paginator, and the normalizer that maps both response shapes to Row.
"""

from solscan_history.solscan_api.client import SolscanClient
from solscan_history.solscan_api.models import AccountSummary, Row
from solscan_history.solscan_api.normalizer import (
    SOURCE_BALANCE_CHANGE,
    SOURCE_TRANSACTION,
    normalize_balance_change,
    normalize_batch,
    normalize_transaction,
)
from solscan_history.solscan_api.paginator import iter_transaction_batches

__all__ = [
    "AccountSummary",
    "Row",
    "SOURCE_BALANCE_CHANGE",
    "SOURCE_TRANSACTION",
    "SolscanClient",
    "iter_transaction_batches",
    "normalize_balance_change",
    "normalize_batch",
    "normalize_transaction",
]
