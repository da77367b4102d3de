"""
Client-side date range filtering for normalized rows.

Bounds are whole UTC days: the start bound is 00:00:00 of the start date and
the end bound is 23:59:59 of the end date. Rows with an unknown timestamp
are never removed.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable

from solscan_history.core.exceptions import ValidationError
from solscan_history.solscan_api.models import Row


def parse_date(value: date | str | None) -> date | None:
    """Accept a date, an ISO 'YYYY-MM-DD' string, or empty; raise ValidationError otherwise."""
    if value is None or isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {text!r} (expected YYYY-MM-DD)") from None


def start_epoch(value: date | str | None) -> int | None:
    """Unix seconds at 00:00:00 UTC of the given day; None when no date."""
    day = parse_date(value)
    if day is None:
        return None
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())


def end_epoch(value: date | str | None) -> int | None:
    """Unix seconds at 23:59:59 UTC of the given day; None when no date."""
    day = parse_date(value)
    if day is None:
        return None
    next_day = datetime.combine(day + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return int(next_day.timestamp()) - 1


def in_range(row: Row, start: int | None, end: int | None) -> bool:
    if row.timestamp is None:
        return True
    if start is not None and row.timestamp < start:
        return False
    if end is not None and row.timestamp > end:
        return False
    return True


def filter_rows(rows: Iterable[Row], start: int | None, end: int | None) -> list[Row]:
    """Keep rows whose timestamp is unknown or inside [start, end]; either bound may be None."""
    if start is None and end is None:
        return list(rows)
    return [row for row in rows if in_range(row, start, end)]
