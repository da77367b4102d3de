"""
Settings tests: environment values and fallbacks to defaults.
"""

from __future__ import annotations

from solscan_history.config import get_settings
from solscan_history.config.env import DEFAULT_BASE_URL, DEFAULT_MAX_ROWS, mask_key

ENV_NAMES = (
    "SOLSCAN_API_KEY",
    "SOLSCAN_BASE_URL",
    "SOLSCAN_REQUEST_TIMEOUT",
    "SOLSCAN_REQUEST_DELAY_SEC",
    "SOLSCAN_MAX_ROWS",
    "SOLSCAN_TX_PAGE_LIMIT",
)


def test_settings_defaults(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
    s = get_settings()
    assert s.api_key == ""
    assert s.base_url == DEFAULT_BASE_URL
    assert s.max_rows == DEFAULT_MAX_ROWS == 20_000
    assert s.request_delay == 0.12
    assert s.tx_page_limit == 50


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SOLSCAN_API_KEY", " secret ")
    monkeypatch.setenv("SOLSCAN_BASE_URL", "https://proxy.local/")
    monkeypatch.setenv("SOLSCAN_MAX_ROWS", "500")
    monkeypatch.setenv("SOLSCAN_REQUEST_DELAY_SEC", "0")
    monkeypatch.setenv("SOLSCAN_TX_PAGE_LIMIT", "40")
    s = get_settings()
    assert s.api_key == "secret"
    assert s.base_url == "https://proxy.local"
    assert s.max_rows == 500
    assert s.request_delay == 0.0
    assert s.tx_page_limit == 40


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SOLSCAN_MAX_ROWS", "lots")
    monkeypatch.setenv("SOLSCAN_REQUEST_TIMEOUT", "-3")
    s = get_settings()
    assert s.max_rows == DEFAULT_MAX_ROWS
    assert s.request_timeout == 30.0


def test_mask_key():
    assert mask_key("abcdefgh") == "***efgh"
    assert mask_key("abc") == "***"
    assert mask_key("") == ""
