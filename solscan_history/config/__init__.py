"""
Configuration management for solscan-history.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for API endpoint, throttling and caps.
"""

from solscan_history.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
