"""
Fetch the transaction history of one Solana account from Solscan Pro and
print account KPIs, a summary, daily activity and a table; optionally export CSV / JSON.

How to run:
    From project root (with .env configured):
        python -m solscan_history.tools.fetch_history --address <ADDR>
        python -m solscan_history.tools.fetch_history --address <ADDR> \
            --start 2024-01-01 --end 2024-01-31 --max-rows 5000 --csv --json out/history.json
    Or via the console script:
        solscan-history --address <ADDR>

Required env vars:
    SOLSCAN_API_KEY   (or pass --api-key)

Exit code 0 when the fetch completes, 1 when it fails (message printed).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from solscan_history.aggregator.controller import FetchRequest, FetchState, run_fetch
from solscan_history.analytics.summary import daily_counts, format_table, summarize
from solscan_history.config import get_settings
from solscan_history.config.env import load_env, print_startup
from solscan_history.export.writers import default_export_path, write_csv, write_json
from solscan_history.solscan_logging import get_logger

logger = get_logger(__name__)

AUTO_PATH = "auto"
DEFAULT_TABLE_ROWS = 20


class _ProgressPrinter:
    """Observer that prints one line per status change to stderr."""

    def __init__(self) -> None:
        self._last_status: str | None = None

    def __call__(self, state: FetchState) -> None:
        if state.status == self._last_status:
            return
        self._last_status = state.status
        print(f"[fetch_history] {state.progress:3d}% {state.status}", file=sys.stderr)


def _format_int(value: int | None) -> str:
    return "—" if value is None else f"{value:,}"


def print_report(state: FetchState, table_rows: int) -> None:
    rows = state.rows
    acct = state.account
    if acct is not None:
        print(f"Lamports:    {_format_int(acct.lamports)}")
        print(f"Type:        {acct.account_type or '—'}")
    print(f"Tx (loaded): {len(rows):,}")
    if not rows:
        return

    summary = summarize(rows)
    print(f"Succeeded / Failed: {summary.succeeded:,} / {summary.failed:,}")
    print(f"Total fees:  {summary.total_fee_sol:.9f} SOL")
    date_range = summary.date_range()
    if date_range is not None:
        print(f"Range:       {date_range[0]} → {date_range[1]}")

    counts = daily_counts(rows)
    if not counts.empty:
        print()
        print("Transactions per day (UTC):")
        for day, count in zip(counts["date"], counts["count"]):
            print(f"  {day}  {int(count):>6}")

    if table_rows > 0:
        print()
        print(format_table(rows, limit=table_rows))


def _export_path(value: str | None, address: str, extension: str) -> Path | None:
    if value is None:
        return None
    if value == AUTO_PATH:
        return default_export_path(address, extension)
    return Path(value)


def export_rows(state: FetchState, address: str, csv_arg: str | None, json_arg: str | None) -> None:
    csv_path = _export_path(csv_arg, address, "csv")
    if csv_path is not None:
        write_csv(state.rows, csv_path)
        print(f"[fetch_history] saved CSV to {csv_path}", file=sys.stderr)
    json_path = _export_path(json_arg, address, "json")
    if json_path is not None:
        write_json(state.rows, json_path)
        print(f"[fetch_history] saved JSON to {json_path}", file=sys.stderr)


def build_parser(default_max_rows: int) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Fetch Solana account history via Solscan Pro API")
    ap.add_argument("--address", type=str, required=True, help="Solana account address")
    ap.add_argument("--api-key", type=str, default=None, help="Solscan Pro API key (default: SOLSCAN_API_KEY)")
    ap.add_argument("--start", type=str, default=None, help="Start date UTC (YYYY-MM-DD)")
    ap.add_argument("--end", type=str, default=None, help="End date UTC, whole day included (YYYY-MM-DD)")
    ap.add_argument("--max-rows", type=int, default=default_max_rows, help=f"Row cap (default: {default_max_rows})")
    ap.add_argument("--csv", nargs="?", const=AUTO_PATH, default=None, help="Write CSV (optional path)")
    ap.add_argument("--json", nargs="?", const=AUTO_PATH, default=None, help="Write JSON (optional path)")
    ap.add_argument("--table", type=int, default=DEFAULT_TABLE_ROWS, help="Rows to print in the table (0 = none)")
    return ap


def main(argv: list[str] | None = None) -> int:
    load_env()
    settings = get_settings()
    args = build_parser(settings.max_rows).parse_args(argv)
    print_startup("fetch_history")

    request = FetchRequest(
        api_key=(args.api_key or settings.api_key or "").strip(),
        address=args.address.strip(),
        start_date=args.start,
        end_date=args.end,
        max_rows=args.max_rows,
    )
    state = run_fetch(request, settings=settings, on_update=_ProgressPrinter())

    print_report(state, args.table)
    if state.failed:
        print(f"[fetch_history] ERROR: {state.status}", file=sys.stderr)
    # Partial rows from a failed fetch are still exported
    if state.rows:
        export_rows(state, request.address, args.csv, args.json)
    return 1 if state.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
