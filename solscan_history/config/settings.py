"""
Application settings.

Typed, immutable view over the environment getters in config.env, so callers
(controller, CLI) read one object instead of scattered os.getenv calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from solscan_history.config import env


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str
    request_timeout: float
    request_delay: float
    max_rows: int
    tx_page_limit: int


def get_settings() -> Settings:
    """
    Return the current settings built from environment variables.

    Returns:
        Settings with api_key (may be empty), base_url, request_timeout,
        request_delay, max_rows and tx_page_limit.
    """
    return Settings(
        api_key=env.get_api_key(),
        base_url=env.get_base_url(),
        request_timeout=env.get_request_timeout(),
        request_delay=env.get_request_delay(),
        max_rows=env.get_max_rows(),
        tx_page_limit=env.get_tx_page_limit(),
    )
