"""
Transaction paginator — cursor-style (`beforeHash`) crawl of an account's transactions.

Yields raw batches newest-first until the API returns an empty page or the
last item of a batch carries no `txHash` to continue from. Bounding the
number of pages is the caller's job.
"""

from __future__ import annotations

from typing import Any, AsyncIterator

from solscan_history.solscan_api.client import DEFAULT_TX_LIMIT, SolscanClient
from solscan_history.solscan_logging import get_logger
from solscan_history.solscan_logging.logger import short_address

logger = get_logger(__name__)

CURSOR_FIELD = "txHash"


def _batch_items(page: dict[str, Any]) -> list[Any]:
    items = page.get("data")
    return items if isinstance(items, list) else []


def _next_cursor(batch: list[Any]) -> str | None:
    last = batch[-1]
    if not isinstance(last, dict):
        return None
    cursor = last.get(CURSOR_FIELD)
    return str(cursor) if cursor else None


async def iter_transaction_batches(
    client: SolscanClient,
    address: str,
    limit: int = DEFAULT_TX_LIMIT,
) -> AsyncIterator[list[dict[str, Any]]]:
    """
    Async generator over raw transaction batches for one address.

    One request per step; the first request carries no cursor. Stops after
    an empty page, or right after yielding a batch whose last item has no
    usable hash.
    """
    cursor: str | None = None
    pages = 0
    while True:
        page = await client.get_transaction_page(address, limit, cursor)
        batch = _batch_items(page)
        if not batch:
            logger.debug("tx_pages_exhausted", address=short_address(address), pages=pages)
            return
        pages += 1
        yield batch
        cursor = _next_cursor(batch)
        if cursor is None:
            logger.info(
                "tx_pages_cursor_missing",
                address=short_address(address),
                pages=pages,
            )
            return
