"""
Main entrypoint: fetch one account's history and print / export it.

Env: SOLSCAN_API_KEY, SOLSCAN_BASE_URL, SOLSCAN_MAX_ROWS, LOG_LEVEL, LOG_FORMAT.
All CLI flags of solscan_history.tools.fetch_history are accepted, e.g.:

    python main.py --address <ADDR> --start 2024-01-01 --csv
"""

import sys

# Configure structured logging before other imports that may log
from solscan_history.solscan_logging import get_logger

logger = get_logger("main")


def main() -> int:
    from solscan_history.tools.fetch_history import main as fetch_history_main

    logger.info("main_started", arg_count=len(sys.argv) - 1)
    return fetch_history_main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
