"""
Environment variable loading for solscan-history.

- SOLSCAN_API_KEY: Solscan Pro API key (sent in the `token` header)
- SOLSCAN_BASE_URL: API host (default: https://pro-api.solscan.io)
- SOLSCAN_REQUEST_TIMEOUT: per-request timeout in seconds (default: 30)
- SOLSCAN_REQUEST_DELAY_SEC: pause between successive requests (default: 0.12)
- SOLSCAN_MAX_ROWS: row cap for one fetch (default: 20000)
- SOLSCAN_TX_PAGE_LIMIT: transactions per page (default: 50)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is solscan_history/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_BASE_URL = "https://pro-api.solscan.io"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_REQUEST_DELAY_SEC = 0.12
DEFAULT_MAX_ROWS = 20_000
DEFAULT_TX_PAGE_LIMIT = 50


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_api_key() -> str:
    """Return SOLSCAN_API_KEY from env, or empty string when unset."""
    load_env()
    return (os.getenv("SOLSCAN_API_KEY") or "").strip()


def get_base_url() -> str:
    load_env()
    url = (os.getenv("SOLSCAN_BASE_URL") or "").strip()
    return (url or DEFAULT_BASE_URL).rstrip("/")


def get_request_timeout() -> float:
    load_env()
    return _float_env("SOLSCAN_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT) or DEFAULT_REQUEST_TIMEOUT


def get_request_delay() -> float:
    """Seconds to wait between successive page requests (throttling, not retry)."""
    load_env()
    return _float_env("SOLSCAN_REQUEST_DELAY_SEC", DEFAULT_REQUEST_DELAY_SEC)


def get_max_rows() -> int:
    load_env()
    return _int_env("SOLSCAN_MAX_ROWS", DEFAULT_MAX_ROWS)


def get_tx_page_limit() -> int:
    load_env()
    return _int_env("SOLSCAN_TX_PAGE_LIMIT", DEFAULT_TX_PAGE_LIMIT)


def mask_key(api_key: str) -> str:
    """Return the key with everything but the last 4 characters hidden."""
    if not api_key:
        return ""
    if len(api_key) <= 4:
        return "***"
    return "***" + api_key[-4:]


def print_startup(script_name: str) -> None:
    """Print base URL and masked API key at script start."""
    load_env()
    key = mask_key(get_api_key()) or "<unset>"
    print(f"[solscan] {script_name} | base_url={get_base_url()} | api_key={key}")
