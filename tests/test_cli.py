"""
CLI tests: exit codes, report output, exports. run_fetch is replaced with canned states.
"""

from __future__ import annotations

import json

import pytest

from conftest import VALID_WALLET
from solscan_history.aggregator.controller import FetchPhase, FetchState
from solscan_history.core.exceptions import HttpError
from solscan_history.solscan_api.models import AccountSummary, Row
from solscan_history.tools import fetch_history


@pytest.fixture
def captured_requests(monkeypatch):
    calls = []

    def _install(state: FetchState):
        def _fake_run_fetch(request, *, settings=None, on_update=None):
            calls.append(request)
            if on_update is not None:
                on_update(state)
            return state

        monkeypatch.setattr(fetch_history, "run_fetch", _fake_run_fetch)
        return calls

    monkeypatch.setenv("SOLSCAN_API_KEY", "env-key")
    return _install


def _done_state() -> FetchState:
    return FetchState(
        phase=FetchPhase.DONE,
        status="Done",
        progress=100,
        rows=[
            Row(timestamp=1_704_067_200, signature="sig1", slot=1, fee_lamports=5000),
            Row(timestamp=None, signature="sig2"),
        ],
        account=AccountSummary(raw={"lamports": 42, "type": "system_account"}),
    )


def test_cli_success_writes_exports(captured_requests, tmp_path, capsys):
    calls = captured_requests(_done_state())
    csv_path = tmp_path / "h.csv"
    json_path = tmp_path / "h.json"

    code = fetch_history.main([
        "--address", VALID_WALLET,
        "--start", "2024-01-01",
        "--max-rows", "100",
        "--csv", str(csv_path),
        "--json", str(json_path),
    ])

    assert code == 0
    req = calls[0]
    assert req.api_key == "env-key"
    assert req.address == VALID_WALLET
    assert req.start_date == "2024-01-01"
    assert req.max_rows == 100
    assert csv_path.read_text(encoding="utf-8").startswith("time_iso,signature,slot,fee_sol,error")
    assert len(json.loads(json_path.read_text(encoding="utf-8"))) == 2
    out = capsys.readouterr().out
    assert "Lamports:    42" in out
    assert "Succeeded / Failed: 2 / 0" in out
    assert "2024-01-01       1" in out


def test_cli_api_key_flag_overrides_env(captured_requests):
    calls = captured_requests(_done_state())
    assert fetch_history.main(["--address", VALID_WALLET, "--api-key", "flag-key", "--table", "0"]) == 0
    assert calls[0].api_key == "flag-key"


def test_cli_failure_exit_code(captured_requests, capsys):
    state = FetchState(
        phase=FetchPhase.FAILED,
        status="Transactions error (500)",
        progress=60,
        error=HttpError(500, "Transactions"),
    )
    captured_requests(state)

    assert fetch_history.main(["--address", VALID_WALLET]) == 1
    assert "ERROR: Transactions error (500)" in capsys.readouterr().err


def test_cli_failure_still_exports_partial_rows(captured_requests, tmp_path):
    state = _done_state()
    state.phase = FetchPhase.FAILED
    state.status = "Transactions error (500)"
    state.progress = 60
    captured_requests(state)
    csv_path = tmp_path / "partial.csv"

    assert fetch_history.main(["--address", VALID_WALLET, "--csv", str(csv_path)]) == 1
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
