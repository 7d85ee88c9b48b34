import importlib

import httpx
import pytest
from typer.testing import CliRunner

from authpay.capability import StaticProofProvider
from authpay.config import Settings
from authpay.session import ClientSession

cli_app_module = importlib.import_module("authpay.cli.app")


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/balance":
        return httpx.Response(200, json={"balance": 42})
    if request.url.path == "/paid":
        return httpx.Response(200, json={"message": "paid", "payment": {"txid": "beef"}})
    return httpx.Response(200, json={"ok": True})


def _fake_build_session(seen: list[Settings]):
    def _build(settings: Settings, *, proof_provider=None) -> ClientSession:
        seen.append(settings)
        client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
        return ClientSession(settings, client=client, proof_provider=StaticProofProvider(payment_proof="proof"))

    return _build


def test_actions_command_lists_catalog() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["actions"])

    assert result.exit_code == 0
    for key in ("free", "balance", "paid-header", "paid-body", "paid-auto"):
        assert key in result.output


def test_call_command_renders_results(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[Settings] = []
    monkeypatch.setattr(cli_app_module, "build_session", _fake_build_session(seen))

    result = CliRunner().invoke(cli_app_module.app, ["call", "free", "paid-auto", "--dev"])

    assert result.exit_code == 0, result.output
    assert seen[0].server_origin == "http://localhost:8787"
    assert "Free Endpoint" in result.output
    assert "Paid (Auto)" in result.output
    assert "beef" in result.output
    # Newest result is printed first.
    assert result.output.index("Paid (Auto)") < result.output.index("Free Endpoint")


def test_call_command_concurrent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_app_module, "build_session", _fake_build_session([]))

    result = CliRunner().invoke(cli_app_module.app, ["call", "balance", "paid-body", "--concurrent"])

    assert result.exit_code == 0, result.output
    assert "Server Balance" in result.output
    assert "Paid (Body)" in result.output


def test_call_command_rejects_unknown_action(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_app_module, "build_session", _fake_build_session([]))

    result = CliRunner().invoke(cli_app_module.app, ["call", "refund"])

    assert result.exit_code == 1
    assert "unknown action" in result.output


def test_call_command_exits_non_zero_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _build(settings: Settings, *, proof_provider=None) -> ClientSession:
        client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
        return ClientSession(settings, client=client, proof_provider=StaticProofProvider())

    monkeypatch.setattr(cli_app_module, "build_session", _build)

    result = CliRunner().invoke(cli_app_module.app, ["call", "paid-header"])

    assert result.exit_code == 1
    assert "no payment proof" in result.output


def test_call_command_rejects_invalid_origin() -> None:
    result = CliRunner().invoke(cli_app_module.app, ["call", "free", "--server-url", "nope"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_chat_command_runs_interactive_loop(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"run": False}

    class _FakeInteractive:
        def __init__(self, session, renderer) -> None:
            self.session = session

        async def run(self) -> None:
            called["run"] = True

    monkeypatch.setattr(cli_app_module, "build_session", _fake_build_session([]))
    monkeypatch.setattr(cli_app_module, "InteractiveCli", _FakeInteractive)

    result = CliRunner().invoke(cli_app_module.app, ["chat"])

    assert result.exit_code == 0, result.output
    assert called["run"] is True
