"""
Data models for Solscan history output.

Row is the canonical transaction record produced by the normalizer from
either the balance-change or the transaction endpoint; AccountSummary wraps
the account-detail payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

LAMPORTS_PER_SOL = 1_000_000_000


@dataclass(frozen=True)
class Row:
    """
    Normalized transaction record.

    Field names are stable regardless of which endpoint (and which alias)
    the source object used.
    """

    timestamp: int | None
    """Unix timestamp (seconds); None if unknown. Unknown rows survive date filtering."""
    signature: str | None
    """Transaction signature (base58)."""
    slot: int | None = None
    fee_lamports: int = 0
    error: Any = None
    """Opaque error payload from the API; None if the transaction succeeded."""

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def fee_sol(self) -> float:
        return self.fee_lamports / LAMPORTS_PER_SOL

    @property
    def time_iso(self) -> str:
        """UTC ISO-8601 time, or empty string when the timestamp is unknown."""
        if self.timestamp is None:
            return ""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "signature": self.signature,
            "slot": self.slot,
            "fee_lamports": self.fee_lamports,
            "error": self.error,
        }


@dataclass(frozen=True)
class AccountSummary:
    """Passthrough of the account-detail `data` object with defensive readers."""

    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def lamports(self) -> int | None:
        value = self.raw.get("lamports")
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def account_type(self) -> str | None:
        value = self.raw.get("type") or self.raw.get("accountType")
        return str(value) if value else None

    @classmethod
    def from_response(cls, response: dict[str, Any] | None) -> AccountSummary | None:
        """Build from a full account-detail response; None when `data` is absent."""
        data = (response or {}).get("data")
        if not isinstance(data, dict):
            return None
        return cls(raw=data)
