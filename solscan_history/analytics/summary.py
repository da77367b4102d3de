"""
History summary — KPIs and per-day activity over normalized rows.

Produces what a dashboard shows next to the fetched rows: succeeded / failed
counts, total fees in SOL, the covered time range, transactions per UTC day,
and a fixed-width text table for terminals.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

import pandas as pd

from solscan_history.solscan_api.models import LAMPORTS_PER_SOL, Row

FRAME_COLUMNS = ["timestamp", "signature", "slot", "fee_lamports", "error"]
EXPLORER_TX_URL = "https://solscan.io/tx/{signature}"
TABLE_HEADERS = ("Time (UTC)", "Signature", "Slot", "Fee (SOL)", "Error")


@dataclass(frozen=True)
class HistorySummary:
    total: int
    succeeded: int
    failed: int
    total_fee_lamports: int
    oldest_timestamp: int | None
    newest_timestamp: int | None
    missing_timestamp: int

    @property
    def total_fee_sol(self) -> float:
        return self.total_fee_lamports / LAMPORTS_PER_SOL

    def date_range(self) -> tuple[str, str] | None:
        """(oldest, newest) as ISO dates, or None when no row has a timestamp."""
        if self.oldest_timestamp is None or self.newest_timestamp is None:
            return None
        return (_iso_date(self.oldest_timestamp), _iso_date(self.newest_timestamp))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "total_fee_lamports": self.total_fee_lamports,
            "total_fee_sol": self.total_fee_sol,
            "oldest_timestamp": self.oldest_timestamp,
            "newest_timestamp": self.newest_timestamp,
            "missing_timestamp": self.missing_timestamp,
        }


def _iso_date(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat()


def summarize(rows: Sequence[Row]) -> HistorySummary:
    failed = sum(1 for r in rows if r.failed)
    timestamps = [r.timestamp for r in rows if r.timestamp is not None]
    return HistorySummary(
        total=len(rows),
        succeeded=len(rows) - failed,
        failed=failed,
        total_fee_lamports=sum(r.fee_lamports for r in rows),
        oldest_timestamp=min(timestamps) if timestamps else None,
        newest_timestamp=max(timestamps) if timestamps else None,
        missing_timestamp=len(rows) - len(timestamps),
    )


def rows_to_frame(rows: Iterable[Row]) -> pd.DataFrame:
    """DataFrame with one row per Row; unknown timestamps / slots are NaN."""
    return pd.DataFrame([r.to_dict() for r in rows], columns=FRAME_COLUMNS)


def daily_counts(rows: Iterable[Row]) -> pd.DataFrame:
    """
    Transactions per UTC day, sorted by date.

    Returns a DataFrame with columns `date` (YYYY-MM-DD) and `count`.
    Rows without a timestamp are not counted.
    """
    frame = rows_to_frame(rows).dropna(subset=["timestamp"])
    if frame.empty:
        return pd.DataFrame({"date": pd.Series(dtype=str), "count": pd.Series(dtype="int64")})
    days = pd.to_datetime(frame["timestamp"].astype("int64"), unit="s", utc=True).dt.strftime("%Y-%m-%d")
    counts = days.value_counts().sort_index()
    return pd.DataFrame({
        "date": counts.index.astype(str),
        "count": counts.to_numpy().astype("int64"),
    })


def short_signature(signature: str | None) -> str:
    if not signature:
        return ""
    if len(signature) <= 16:
        return signature
    return f"{signature[:8]}…{signature[-8:]}"


def explorer_url(signature: str) -> str:
    return EXPLORER_TX_URL.format(signature=signature)


def _table_cells(row: Row) -> tuple[str, ...]:
    return (
        row.time_iso,
        short_signature(row.signature),
        "" if row.slot is None else str(row.slot),
        f"{row.fee_sol:.9f}",
        "" if row.error is None else json.dumps(row.error, default=str),
    )


def format_table(rows: Sequence[Row], limit: int | None = None) -> str:
    """Fixed-width text table of rows (first `limit` rows when given)."""
    shown = rows if limit is None else rows[:limit]
    body = [_table_cells(r) for r in shown]
    widths = [len(h) for h in TABLE_HEADERS]
    for cells in body:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], len(cell))
    lines = [
        "  ".join(h.ljust(widths[i]) for i, h in enumerate(TABLE_HEADERS)),
        "  ".join("-" * w for w in widths),
    ]
    for cells in body:
        lines.append("  ".join(c.ljust(widths[i]) for i, c in enumerate(cells)).rstrip())
    if limit is not None and len(rows) > limit:
        lines.append(f"... {len(rows) - limit} more rows")
    return "\n".join(lines)
