"""
Solscan Pro API client — account detail, balance-change pages, transaction pages.

Responsibilities:
- Issue one authenticated GET per call (API key in the `token` header).
- Raise HttpError on non-success status, NetworkError on transport failure,
  ResponseError on a body that is not JSON.
- No retries: every failure surfaces to the caller immediately.
"""

from __future__ import annotations

from typing import Any

import httpx

from solscan_history.config.env import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from solscan_history.core.exceptions import HttpError, NetworkError, ResponseError
from solscan_history.solscan_logging import get_logger
from solscan_history.solscan_logging.logger import short_address

logger = get_logger(__name__)

TOKEN_HEADER = "token"

ACCOUNT_DETAIL_PATH = "/v2.0/account/detail"
BALANCE_CHANGE_PATH = "/v2.0/account/balance_change"
TRANSACTIONS_PATH = "/v2.0/account/transactions"

DEFAULT_BALANCE_PAGE_SIZE = 100
DEFAULT_TX_LIMIT = 50


class SolscanClient:
    """
    Async client for the three Solscan account endpoints used by the history fetch.

    Use as an async context manager, or pass an existing httpx.AsyncClient
    (caller keeps ownership and closes it).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_sec: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            api_key: Solscan Pro API key; sent as the `token` header, never logged.
            base_url: API host, e.g. https://pro-api.solscan.io.
            timeout_sec: Per-request timeout.
            http_client: Optional shared client (tests inject one with MockTransport).
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> SolscanClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: dict[str, Any], endpoint: str) -> dict[str, Any]:
        """Perform one GET; raise on transport error, non-2xx status or non-JSON body."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
            self._owns_client = True
        url = f"{self._base_url}{path}"
        logger.debug(
            "solscan_request",
            endpoint=endpoint,
            path=path,
            address=short_address(str(params.get("address", ""))),
            params={k: v for k, v in params.items() if k != "address"},
        )
        try:
            resp = await self._client.get(
                url, params=params, headers={TOKEN_HEADER: self._api_key}
            )
        except httpx.TransportError as e:
            logger.warning("solscan_network_error", endpoint=endpoint, error=str(e))
            raise NetworkError(f"{endpoint} network error: {e}") from e

        if not resp.is_success:
            logger.warning("solscan_http_error", endpoint=endpoint, status=resp.status_code)
            raise HttpError(resp.status_code, endpoint)
        try:
            data = resp.json()
        except ValueError as e:
            raise ResponseError(f"{endpoint} returned invalid JSON") from e
        return data if isinstance(data, dict) else {"data": data}

    async def get_account_detail(self, address: str) -> dict[str, Any]:
        """GET /v2.0/account/detail; returns the full JSON body (payload under `data`)."""
        return await self._get(
            ACCOUNT_DETAIL_PATH, {"address": address}, "Account detail"
        )

    async def get_balance_changes(
        self,
        address: str,
        from_time: int,
        to_time: int,
        page: int = 1,
        page_size: int = DEFAULT_BALANCE_PAGE_SIZE,
    ) -> dict[str, Any]:
        """GET /v2.0/account/balance_change for one page; items live under `data.list`."""
        params = {
            "address": address,
            "from_time": int(from_time),
            "to_time": int(to_time),
            "page": page,
            "page_size": page_size,
        }
        return await self._get(BALANCE_CHANGE_PATH, params, "Balance changes")

    async def get_transaction_page(
        self,
        address: str,
        limit: int = DEFAULT_TX_LIMIT,
        before_hash: str | None = None,
    ) -> dict[str, Any]:
        """GET /v2.0/account/transactions; `beforeHash` is sent only when a cursor is given."""
        params: dict[str, Any] = {"address": address, "limit": limit}
        if before_hash:
            params["beforeHash"] = before_hash
        return await self._get(TRANSACTIONS_PATH, params, "Transactions")
