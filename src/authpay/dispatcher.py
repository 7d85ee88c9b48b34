"""Request dispatch with loading and error bookkeeping."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from authpay.actions import ActionSpec
from authpay.capability import AuthFetch
from authpay.store import ResultStore
from authpay.transport import transport_options
from authpay.types import Accent, ActionKey, DispatchResult, Err, Ok, RequestOutcome, TransportMode


@dataclass
class SessionState:
    """UI-facing state shared by all dispatches of one session.

    ``loading_key`` tracks only the most recently initiated call. It is a
    display flag, not a lock: overlapping calls still run and each records
    its own result.
    """

    loading_key: ActionKey | None = None
    error: str | None = None


def error_message(exc: BaseException) -> str:
    message = str(exc)
    return message if message else type(exc).__name__


class RequestDispatcher:
    """Execute single calls against the server and record their outcomes."""

    def __init__(
        self,
        auth_fetch: AuthFetch,
        plain_fetch: AuthFetch,
        store: ResultStore,
        *,
        server_url: str,
        state: SessionState | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._auth_fetch = auth_fetch
        self._plain_fetch = plain_fetch
        self.store = store
        self.state = state or SessionState()
        self._server_url = server_url.rstrip("/")
        self._clock = clock

    @property
    def loading_key(self) -> ActionKey | None:
        return self.state.loading_key

    @property
    def error(self) -> str | None:
        return self.state.error

    def is_loading(self, key: ActionKey) -> bool:
        return self.state.loading_key == key

    def dismiss_error(self) -> None:
        self.state.error = None

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._server_url}{path}"

    async def dispatch(
        self,
        action_key: ActionKey,
        endpoint_path: str,
        options: Mapping[str, Any] | None = None,
        transport_mode: TransportMode | str | None = None,
        *,
        title: str | None = None,
        accent: Accent = "emerald",
        authenticated: bool = True,
    ) -> DispatchResult:
        """Run one call and record it.

        Non-2xx responses are recorded like any other outcome. Network and
        JSON parsing failures become the session error and leave the result
        log untouched.
        """

        url = self.url_for(endpoint_path)
        self.state.loading_key = action_key
        self.state.error = None
        logger.debug("dispatch.start key={} url={} transport={}", action_key, url, transport_mode)
        start = self._clock()
        try:
            mode = TransportMode(transport_mode) if transport_mode is not None else None
            if authenticated:
                request_options = {"method": "POST", **transport_options(mode), **(options or {})}
                response = await self._auth_fetch(url, request_options)
            else:
                response = await self._plain_fetch(url, {"method": "GET", **(options or {})})
            data = await response.json()
            duration_ms = max(0, math.floor((self._clock() - start) * 1000 + 0.5))
            outcome = RequestOutcome(data=data, status=response.status, duration_ms=duration_ms, transport=mode)
            self.store.append(title or action_key, outcome, accent)
        except Exception as exc:
            message = error_message(exc)
            self.state.error = message
            logger.warning("dispatch.error key={} url={} error={}", action_key, url, message)
            return Err(message)
        finally:
            if self.state.loading_key == action_key:
                self.state.loading_key = None

        logger.info(
            "dispatch.done key={} status={} duration_ms={}", action_key, outcome.status, outcome.duration_ms
        )
        return Ok(outcome)

    async def call_endpoint(
        self,
        path: str,
        title: str,
        accent: Accent,
        key: ActionKey,
        fetch_options: Mapping[str, Any] | None = None,
        transport_label: TransportMode | str | None = None,
    ) -> DispatchResult:
        return await self.dispatch(key, path, fetch_options, transport_label, title=title, accent=accent)

    async def fetch_balance(self) -> DispatchResult:
        return await self.dispatch("balance", "/balance", title="Server Balance", accent="sky", authenticated=False)

    async def run_action(self, action: ActionSpec) -> DispatchResult:
        return await self.dispatch(
            action.key,
            action.path,
            None,
            action.transport,
            title=action.title,
            accent=action.accent,
            authenticated=action.authenticated,
        )
