from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from loguru import logger

from authpay import logging_utils


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in list(os.environ):
        if name.upper().startswith("AUTHPAY_"):
            monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    # CLI commands install a sink on the runner's captured stderr; drop it after each test.
    logger.remove()
    logging_utils._CONFIGURED_LEVEL = None


class FakeResponse:
    def __init__(self, status: int = 200, data: Any = None, error: Exception | None = None) -> None:
        self.status = status
        self._data = data
        self._error = error

    async def json(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._data


class FakeFetch:
    """Records calls and answers with a fixed response or raises."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or FakeResponse(200, {"ok": True})
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, options) -> FakeResponse:
        self.calls.append((url, dict(options)))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_fetch() -> Callable[..., FakeFetch]:
    return FakeFetch


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    return FakeResponse
