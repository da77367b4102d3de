"""
Row normalizer — raw Solscan items to canonical Row objects.

The balance-change and transaction endpoints return differently-shaped
objects for the same logical data. Each logical field has an ordered alias
list per source; the first alias with a non-None value wins, otherwise the
field default applies. Pure functions, no I/O.
"""

from __future__ import annotations

from typing import Any, Iterable

from solscan_history.solscan_api.models import Row

SOURCE_BALANCE_CHANGE = "balance_change"
SOURCE_TRANSACTION = "transaction"

BALANCE_CHANGE_ALIASES: dict[str, tuple[str, ...]] = {
    "timestamp": ("block_time", "blockTime", "ts"),
    "signature": ("tx_hash", "txHash"),
    "slot": ("slot",),
    "fee_lamports": ("fee",),
    "error": ("err",),
}

TRANSACTION_ALIASES: dict[str, tuple[str, ...]] = {
    "timestamp": ("blockTime", "blockTimeUnix", "block_time"),
    "signature": ("txHash", "txhash"),
    "slot": ("slot",),
    "fee_lamports": ("fee", "feeLamports"),
    "error": ("err", "error"),
}

_ALIASES_BY_SOURCE = {
    SOURCE_BALANCE_CHANGE: BALANCE_CHANGE_ALIASES,
    SOURCE_TRANSACTION: TRANSACTION_ALIASES,
}


def first_present(item: dict[str, Any], aliases: Iterable[str]) -> Any:
    """Return the value of the first alias present (non-None) in item, else None."""
    for name in aliases:
        value = item.get(name)
        if value is not None:
            return value
    return None


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize(item: dict[str, Any], aliases: dict[str, tuple[str, ...]]) -> Row:
    """Map one raw item to a Row using the given alias table."""
    fee = _to_int(first_present(item, aliases["fee_lamports"]))
    return Row(
        timestamp=_to_int(first_present(item, aliases["timestamp"])),
        signature=_to_str(first_present(item, aliases["signature"])),
        slot=_to_int(first_present(item, aliases["slot"])),
        fee_lamports=fee if fee is not None else 0,
        error=first_present(item, aliases["error"]),
    )


def normalize_balance_change(item: dict[str, Any]) -> Row:
    return normalize(item, BALANCE_CHANGE_ALIASES)


def normalize_transaction(item: dict[str, Any]) -> Row:
    return normalize(item, TRANSACTION_ALIASES)


def normalize_batch(items: Iterable[Any], source: str) -> list[Row]:
    """
    Normalize a page of raw items from one source.

    Args:
        items: Raw list from the API (non-dict entries are skipped).
        source: SOURCE_BALANCE_CHANGE or SOURCE_TRANSACTION.

    Returns:
        Rows in the same order as items.
    """
    try:
        aliases = _ALIASES_BY_SOURCE[source]
    except KeyError:
        raise ValueError(f"Unknown source: {source!r}") from None
    return [normalize(item, aliases) for item in items if isinstance(item, dict)]
