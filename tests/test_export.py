"""
Export tests: CSV columns / values and JSON dump.
"""

from __future__ import annotations

import csv
import json

from solscan_history.export.writers import (
    CSV_COLUMNS,
    csv_record,
    default_export_path,
    write_csv,
    write_json,
)
from solscan_history.solscan_api.models import Row

ROWS = [
    Row(timestamp=1_704_067_200, signature="sig1", slot=7, fee_lamports=5000),
    Row(timestamp=None, signature="sig2", slot=None, fee_lamports=0, error={"InstructionError": [0, "Custom"]}),
]


def test_csv_record_values():
    rec = csv_record(ROWS[0])
    assert list(rec) == CSV_COLUMNS
    assert rec["time_iso"] == "2024-01-01T00:00:00+00:00"
    assert rec["fee_sol"] == "0.000005000"
    assert rec["slot"] == 7
    assert rec["error"] == ""


def test_write_csv(tmp_path):
    path = write_csv(ROWS, tmp_path / "out" / "history.csv")

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == ["time_iso", "signature", "slot", "fee_sol", "error"]
        lines = list(reader)

    assert len(lines) == 2
    assert lines[1]["time_iso"] == ""
    assert lines[1]["slot"] == ""
    assert json.loads(lines[1]["error"]) == {"InstructionError": [0, "Custom"]}


def test_write_json_full_rows(tmp_path):
    path = write_json(ROWS, tmp_path / "history.json")
    data = json.loads(path.read_text(encoding="utf-8"))

    assert data == [r.to_dict() for r in ROWS]
    assert data[1]["timestamp"] is None


def test_default_export_path(tmp_path):
    path = default_export_path("ADDR", ".csv", directory=tmp_path, now_ms=1234)
    assert path == tmp_path / "solscan_ADDR_1234.csv"
