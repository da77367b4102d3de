"""
History fetch controller — two-phase aggregation with progress and a row cap.

Phases: account detail, optional balance-change pages (only when a date
bound is given), then the full `beforeHash` transaction crawl. Requests are
strictly sequential with a fixed pause between pages. Any error stops the
fetch, marks the state FAILED with the error message, and keeps the rows
accumulated so far.

The row cap is lenient: it is checked after each page is appended, so the
final result can exceed max_rows by up to one page. No further page is
requested once the cap is reached.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import aclosing
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Callable

from solscan_history.aggregator.filters import end_epoch, filter_rows, start_epoch
from solscan_history.config.env import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ROWS,
    DEFAULT_REQUEST_DELAY_SEC,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TX_PAGE_LIMIT,
)
from solscan_history.config.settings import Settings
from solscan_history.core.exceptions import ValidationError
from solscan_history.solscan_api.client import DEFAULT_BALANCE_PAGE_SIZE, SolscanClient
from solscan_history.solscan_api.models import AccountSummary, Row
from solscan_history.solscan_api.normalizer import (
    SOURCE_BALANCE_CHANGE,
    SOURCE_TRANSACTION,
    normalize_batch,
)
from solscan_history.solscan_api.paginator import iter_transaction_batches
from solscan_history.solscan_logging import bind_address, get_logger

logger = get_logger(__name__)

# Progress milestones (percent)
PROGRESS_ACCOUNT = 5
PROGRESS_BALANCE_BASE = 20
PROGRESS_BALANCE_STEP = 4
PROGRESS_BALANCE_MAX = 80
PROGRESS_TX_BASE = 60
PROGRESS_TX_SPAN = 35
PROGRESS_TX_MAX = 95
PROGRESS_TX_MIN_SCALE = 500
PROGRESS_DONE = 100


class FetchPhase(str, Enum):
    IDLE = "idle"
    FETCHING_ACCOUNT = "fetching_account"
    FETCHING_BALANCE_CHANGES = "fetching_balance_changes"
    FETCHING_TRANSACTIONS = "fetching_transactions"
    DONE = "done"
    FAILED = "failed"


ACTIVE_PHASES = frozenset({
    FetchPhase.FETCHING_ACCOUNT,
    FetchPhase.FETCHING_BALANCE_CHANGES,
    FetchPhase.FETCHING_TRANSACTIONS,
})


@dataclass(frozen=True)
class FetchRequest:
    """Caller input for one fetch. The API key is used for requests only, never stored."""

    api_key: str
    address: str
    start_date: date | str | None = None
    end_date: date | str | None = None
    max_rows: int = DEFAULT_MAX_ROWS


@dataclass
class FetchState:
    """Observable state of the current fetch; replaced wholesale on every fetch_all()."""

    phase: FetchPhase = FetchPhase.IDLE
    status: str = "Idle"
    progress: int = 0
    rows: list[Row] = field(default_factory=list)
    account: AccountSummary | None = None
    error: Exception | None = None

    @property
    def loading(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def done(self) -> bool:
        return self.phase is FetchPhase.DONE

    @property
    def failed(self) -> bool:
        return self.phase is FetchPhase.FAILED


ClientFactory = Callable[[str], SolscanClient]
UpdateCallback = Callable[[FetchState], Any]


def balance_progress(page: int) -> int:
    return min(PROGRESS_BALANCE_MAX, PROGRESS_BALANCE_BASE + page * PROGRESS_BALANCE_STEP)


def transaction_progress(tx_count: int, max_rows: int) -> int:
    ratio = tx_count / max(PROGRESS_TX_MIN_SCALE, max_rows)
    return min(PROGRESS_TX_MAX, PROGRESS_TX_BASE + int(ratio * PROGRESS_TX_SPAN + 0.5))


class HistoryController:
    """
    Orchestrates one account history fetch at a time.

    Holds the FetchState read by the presentation layer and notifies an
    optional observer after every change.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_sec: float = DEFAULT_REQUEST_TIMEOUT,
        request_delay_sec: float = DEFAULT_REQUEST_DELAY_SEC,
        tx_page_limit: int = DEFAULT_TX_PAGE_LIMIT,
        balance_page_size: int = DEFAULT_BALANCE_PAGE_SIZE,
        on_update: UpdateCallback | None = None,
        client_factory: ClientFactory | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            base_url: Solscan API host.
            timeout_sec: Per-request HTTP timeout.
            request_delay_sec: Pause between successive page requests.
            tx_page_limit: Transactions requested per page.
            balance_page_size: Balance-change items requested per page.
            on_update: Optional observer called with the FetchState after each change.
            client_factory: Builds a SolscanClient from an API key; defaults to one
                using base_url and timeout_sec.
            clock: Source of "now" (Unix seconds) for an open-ended date range.
        """
        if request_delay_sec < 0:
            raise ValueError("request_delay_sec must be >= 0")
        if tx_page_limit <= 0 or balance_page_size <= 0:
            raise ValueError("page sizes must be positive")
        self._base_url = base_url
        self._timeout = timeout_sec
        self._request_delay = request_delay_sec
        self._tx_page_limit = tx_page_limit
        self._balance_page_size = balance_page_size
        self._on_update = on_update
        self._client_factory = client_factory or self._default_client
        self._clock = clock
        self._state = FetchState()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        on_update: UpdateCallback | None = None,
    ) -> HistoryController:
        return cls(
            base_url=settings.base_url,
            timeout_sec=settings.request_timeout,
            request_delay_sec=settings.request_delay,
            tx_page_limit=settings.tx_page_limit,
            on_update=on_update,
        )

    @property
    def state(self) -> FetchState:
        return self._state

    def _default_client(self, api_key: str) -> SolscanClient:
        return SolscanClient(api_key, base_url=self._base_url, timeout_sec=self._timeout)

    # ------------------------------------------------------------------
    # State updates
    # ------------------------------------------------------------------

    def _notify(self) -> None:
        cb = self._on_update
        if cb is None:
            return
        try:
            cb(self._state)
        except Exception as e:
            # Observer failures must not abort the fetch
            logger.exception("history_observer_failed", error=str(e))

    def _update(
        self,
        *,
        phase: FetchPhase | None = None,
        status: str | None = None,
        progress: int | None = None,
        rows: list[Row] | None = None,
    ) -> None:
        state = self._state
        if phase is not None:
            state.phase = phase
        if status is not None:
            state.status = status
        if progress is not None:
            # Reported progress never goes backwards
            state.progress = max(state.progress, progress)
        if rows is not None:
            state.rows = rows
        self._notify()

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(request: FetchRequest) -> None:
        if not (request.api_key or "").strip():
            raise ValidationError("Enter your Solscan Pro API key.")
        if not (request.address or "").strip():
            raise ValidationError("Enter a Solana address.")
        if request.max_rows <= 0:
            raise ValidationError("Max rows must be a positive number.")

    async def fetch_all(self, request: FetchRequest) -> FetchState:
        """
        Run one full fetch and return the final state (DONE or FAILED).

        The previous state is discarded. Errors are recorded on the returned
        state rather than raised.
        """
        self._state = FetchState()
        address = (request.address or "").strip()
        log = bind_address(address)
        try:
            self._validate(request)
            request = replace(request, address=address)
            start = start_epoch(request.start_date)
            end = end_epoch(request.end_date)

            self._update(
                phase=FetchPhase.FETCHING_ACCOUNT,
                status="Fetching account…",
                progress=PROGRESS_ACCOUNT,
                rows=[],
            )
            log.info(
                "history_fetch_started",
                start_epoch=start,
                end_epoch=end,
                max_rows=request.max_rows,
            )
            async with self._client_factory(request.api_key) as client:
                detail = await client.get_account_detail(address)
                self._state.account = AccountSummary.from_response(detail)
                self._notify()

                balance_rows: list[Row] = []
                if start is not None or end is not None:
                    balance_rows = await self._fetch_balance_changes(client, request, start, end)
                await self._fetch_transactions(client, request, balance_rows, start, end)
        except Exception as e:
            self._state.phase = FetchPhase.FAILED
            self._state.status = str(e) or e.__class__.__name__
            self._state.error = e
            log.exception(
                "history_fetch_failed",
                error=str(e),
                error_code=getattr(e, "code", None),
                rows=len(self._state.rows),
                progress=self._state.progress,
            )
            self._notify()
            return self._state

        self._update(phase=FetchPhase.DONE, status="Done", progress=PROGRESS_DONE)
        log.info("history_fetch_done", rows=len(self._state.rows))
        return self._state

    async def _fetch_balance_changes(
        self,
        client: SolscanClient,
        request: FetchRequest,
        start: int | None,
        end: int | None,
    ) -> list[Row]:
        """Offset-style pages 1, 2, ... until an empty page or the cap. Server filters by time."""
        from_time = start if start is not None else 0
        to_time = end if end is not None else int(self._clock())
        self._update(
            phase=FetchPhase.FETCHING_BALANCE_CHANGES,
            status="Fetching balance changes…",
        )
        log = bind_address(request.address)
        rows: list[Row] = []
        page = 1
        while True:
            resp = await client.get_balance_changes(
                request.address, from_time, to_time, page, self._balance_page_size
            )
            items = _balance_items(resp)
            rows.extend(normalize_batch(items, SOURCE_BALANCE_CHANGE))
            self._update(rows=list(rows), progress=balance_progress(page))
            log.debug("balance_page_loaded", page=page, items=len(items), total=len(rows))
            if not items or len(rows) >= request.max_rows:
                break
            page += 1
            await asyncio.sleep(self._request_delay)
        log.info("balance_changes_loaded", pages=page, rows=len(rows))
        return rows

    async def _fetch_transactions(
        self,
        client: SolscanClient,
        request: FetchRequest,
        balance_rows: list[Row],
        start: int | None,
        end: int | None,
    ) -> None:
        """Drain the transaction paginator, re-filtering the crawl set by date after each page."""
        self._update(
            phase=FetchPhase.FETCHING_TRANSACTIONS,
            status="Fetching transactions (pagination) …",
        )
        log = bind_address(request.address)
        if len(balance_rows) >= request.max_rows:
            log.info("tx_crawl_skipped_cap_reached", rows=len(balance_rows), max_rows=request.max_rows)
            return

        tx_rows: list[Row] = []
        pages = 0
        batches = iter_transaction_batches(client, request.address, self._tx_page_limit)
        async with aclosing(batches):
            async for batch in batches:
                pages += 1
                tx_rows.extend(normalize_batch(batch, SOURCE_TRANSACTION))
                tx_rows = filter_rows(tx_rows, start, end)
                total = len(balance_rows) + len(tx_rows)
                self._update(
                    rows=balance_rows + tx_rows,
                    status=f"Fetched {total}…",
                    progress=transaction_progress(len(tx_rows), request.max_rows),
                )
                if total >= request.max_rows:
                    log.info("tx_crawl_cap_reached", pages=pages, rows=total, max_rows=request.max_rows)
                    break
                await asyncio.sleep(self._request_delay)
        log.info("tx_crawl_finished", pages=pages, rows=len(tx_rows))


def _balance_items(resp: dict[str, Any]) -> list[Any]:
    data = resp.get("data")
    if not isinstance(data, dict):
        return []
    items = data.get("list")
    return items if isinstance(items, list) else []


def run_fetch(
    request: FetchRequest,
    *,
    settings: Settings | None = None,
    on_update: UpdateCallback | None = None,
) -> FetchState:
    """Blocking helper for scripts: build a controller and run one fetch."""
    if settings is None:
        from solscan_history.config import get_settings

        settings = get_settings()
    controller = HistoryController.from_settings(settings, on_update=on_update)
    return asyncio.run(controller.fetch_all(request))
