"""
Aggregation package: the two-phase history fetch controller and date filters.
"""

from solscan_history.aggregator.controller import (
    FetchPhase,
    FetchRequest,
    FetchState,
    HistoryController,
    run_fetch,
)
from solscan_history.aggregator.filters import end_epoch, filter_rows, start_epoch

__all__ = [
    "FetchPhase",
    "FetchRequest",
    "FetchState",
    "HistoryController",
    "end_epoch",
    "filter_rows",
    "run_fetch",
    "start_epoch",
]
