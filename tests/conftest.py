"""
Pytest fixtures for solscan-history tests. Solscan is stubbed with httpx.MockTransport.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from solscan_history.aggregator.controller import HistoryController
from solscan_history.solscan_api.client import (
    ACCOUNT_DETAIL_PATH,
    BALANCE_CHANGE_PATH,
    TRANSACTIONS_PATH,
    SolscanClient,
)

TEST_BASE_URL = "https://pro-api.test"
TEST_API_KEY = "test-key-1234"
VALID_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
FIXED_NOW = 1_710_000_000


def tx_item(n: int, block_time: int | None = 1_704_100_000, **extra: Any) -> dict[str, Any]:
    """Transaction-endpoint item with txHash `sig<n>`."""
    item: dict[str, Any] = {"txHash": f"sig{n}", "slot": 250_000_000 + n, "fee": 5000}
    if block_time is not None:
        item["blockTime"] = block_time
    item.update(extra)
    return item


def balance_item(n: int, block_time: int = 1_704_100_000, **extra: Any) -> dict[str, Any]:
    """Balance-change-endpoint item with tx_hash `bal<n>`."""
    item: dict[str, Any] = {"tx_hash": f"bal{n}", "block_time": block_time, "slot": 240_000_000 + n, "fee": 5000}
    item.update(extra)
    return item


class FakeSolscanApi:
    """
    In-memory Solscan endpoints. Transaction pages are served in order, one per
    request; balance pages by `page` number. Every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.account: dict[str, Any] = {
            "success": True,
            "data": {"lamports": 1_500_000_000, "type": "system_account"},
        }
        self.balance_pages: list[list[dict[str, Any]]] = []
        self.tx_pages: list[list[dict[str, Any]]] = []
        self.statuses: dict[str, int] = {}
        self.status_after: dict[str, int] = {}
        self.errors: dict[str, Exception] = {}
        self._tx_served = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.errors:
            raise self.errors[path]
        if path in self.statuses:
            return httpx.Response(self.statuses[path], json={"success": False})
        if path == ACCOUNT_DETAIL_PATH:
            return httpx.Response(200, json=self.account)
        if path == BALANCE_CHANGE_PATH:
            page = int(request.url.params["page"])
            items = self.balance_pages[page - 1] if page <= len(self.balance_pages) else []
            return httpx.Response(200, json={"success": True, "data": {"list": items}})
        if path == TRANSACTIONS_PATH:
            served = self._tx_served
            self._tx_served += 1
            if path in self.status_after and served >= self.status_after[path]:
                return httpx.Response(500, json={"success": False})
            items = self.tx_pages[served] if served < len(self.tx_pages) else []
            return httpx.Response(200, json={"success": True, "data": items})
        return httpx.Response(404)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def client(self, api_key: str = TEST_API_KEY) -> SolscanClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return SolscanClient(api_key, base_url=TEST_BASE_URL, http_client=http_client)


@pytest.fixture
def solscan_api() -> FakeSolscanApi:
    return FakeSolscanApi()


@pytest.fixture
def controller_factory(solscan_api):
    """Build a HistoryController wired to the fake API with no delay between pages."""

    def _build(**kwargs: Any) -> HistoryController:
        kwargs.setdefault("request_delay_sec", 0)
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        return HistoryController(client_factory=solscan_api.client, **kwargs)

    return _build
