"""
Structured logging for solscan-history.

JSON logs with timestamp, event_type and address context.
Use get_logger() in every module for aggregation-friendly output.
"""

from solscan_history.solscan_logging.logger import bind_address, get_logger

__all__ = ["bind_address", "get_logger"]
