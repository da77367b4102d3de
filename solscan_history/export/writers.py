"""
CSV / JSON export of normalized rows.

CSV columns: time_iso, signature, slot, fee_sol, error (fee in SOL, error as
JSON text). JSON is the full row list as dicts.
"""

from __future__ import annotations

import csv
import json
import time
from pathlib import Path
from typing import Any, Iterable

from solscan_history.solscan_api.models import Row
from solscan_history.solscan_logging import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = ["time_iso", "signature", "slot", "fee_sol", "error"]


def csv_record(row: Row) -> dict[str, Any]:
    """One CSV line as a dict keyed by CSV_COLUMNS."""
    return {
        "time_iso": row.time_iso,
        "signature": row.signature or "",
        "slot": "" if row.slot is None else row.slot,
        "fee_sol": f"{row.fee_sol:.9f}",
        "error": "" if row.error is None else json.dumps(row.error, default=str),
    }


def write_csv(rows: Iterable[Row], path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(csv_record(row))
            count += 1
    logger.info("export_csv_written", path=str(path), rows=count)
    return path


def write_json(rows: Iterable[Row], path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [row.to_dict() for row in rows]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, default=str)
    logger.info("export_json_written", path=str(path), rows=len(payload))
    return path


def default_export_path(
    address: str,
    extension: str,
    directory: Path | str = ".",
    now_ms: int | None = None,
) -> Path:
    """solscan_<address>_<unix_ms>.<extension> inside directory."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return Path(directory) / f"solscan_{address}_{now_ms}.{extension.lstrip('.')}"
