"""Client session bootstrap."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import httpx

from authpay.actions import ActionSpec
from authpay.capability import HttpxAuthFetch, HttpxPlainFetch, ProofProvider, StaticProofProvider, build_http_client
from authpay.config import Settings
from authpay.dispatcher import RequestDispatcher
from authpay.store import ResultStore
from authpay.types import DispatchResult


class ClientSession:
    """Owns the HTTP client, the result log and the dispatcher for one run."""

    def __init__(
        self,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
        proof_provider: ProofProvider | None = None,
    ) -> None:
        self.settings = settings
        self._client = client or build_http_client(settings.request_timeout_seconds)
        provider = proof_provider or StaticProofProvider(settings.identity_key, settings.payment_proof)
        self.store = ResultStore()
        self.dispatcher = RequestDispatcher(
            HttpxAuthFetch(self._client, provider),
            HttpxPlainFetch(self._client),
            self.store,
            server_url=settings.server_origin,
        )

    async def __aenter__(self) -> ClientSession:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def run(self, actions: Iterable[ActionSpec], *, concurrent: bool = False) -> list[DispatchResult]:
        """Run actions one after another, or all at once when ``concurrent``."""

        if concurrent:
            return list(await asyncio.gather(*(self.dispatcher.run_action(action) for action in actions)))
        return [await self.dispatcher.run_action(action) for action in actions]


def build_session(settings: Settings, *, proof_provider: ProofProvider | None = None) -> ClientSession:
    return ClientSession(settings, proof_provider=proof_provider)
