"""
Analytics over fetched history: KPIs, daily activity counts, and a text table.
"""

from solscan_history.analytics.summary import (
    HistorySummary,
    daily_counts,
    format_table,
    rows_to_frame,
    summarize,
)

__all__ = [
    "HistorySummary",
    "daily_counts",
    "format_table",
    "rows_to_frame",
    "summarize",
]
