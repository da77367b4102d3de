"""
Export of fetched rows to CSV and JSON files.
"""

from solscan_history.export.writers import (
    CSV_COLUMNS,
    csv_record,
    default_export_path,
    write_csv,
    write_json,
)

__all__ = ["CSV_COLUMNS", "csv_record", "default_export_path", "write_csv", "write_json"]
