"""Authenticated and plain HTTP call capabilities."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from typing import Any, Protocol

import httpx
from loguru import logger

from authpay.errors import ProofUnavailableError
from authpay.transport import PAYMENT_BODY_FIELD, PAYMENT_HEADER, TRANSPORT_OPTION, resolve_transport

IDENTITY_KEY_HEADER = "x-bsv-auth-identity-key"


class ResponseLike(Protocol):
    """Minimal response contract consumed by the dispatcher."""

    status: int

    async def json(self) -> Any: ...


class AuthFetch(Protocol):
    """Perform one call, attaching auth and payment material per ``options``."""

    async def __call__(self, url: str, options: Mapping[str, Any]) -> ResponseLike: ...


class ProofProvider(Protocol):
    """Opaque source of mutual-auth headers and serialized payment proofs."""

    async def auth_headers(self, method: str, url: str) -> dict[str, str]: ...

    async def payment_proof(self, method: str, url: str) -> str | bytes | None: ...


def serialize_proof(proof: str | bytes) -> str:
    """Text form of a payment proof as it is attached to the request.

    Raw bytes are base64 encoded; strings are taken as already serialized.
    """

    if isinstance(proof, bytes):
        return base64.b64encode(proof).decode("ascii")
    return proof


class HttpResponse:
    """Adapt an ``httpx.Response`` to the ``ResponseLike`` contract."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.status = response.status_code

    async def json(self) -> Any:
        return self._response.json()


class StaticProofProvider:
    """Proof provider backed by pre-generated material from settings."""

    def __init__(self, identity_key: str | None = None, payment_proof: str | bytes | None = None) -> None:
        self._identity_key = identity_key
        self._payment_proof = payment_proof

    async def auth_headers(self, method: str, url: str) -> dict[str, str]:
        _ = (method, url)
        if not self._identity_key:
            return {}
        return {IDENTITY_KEY_HEADER: self._identity_key}

    async def payment_proof(self, method: str, url: str) -> str | bytes | None:
        _ = (method, url)
        return self._payment_proof


class HttpxAuthFetch:
    """Authenticated call capability on top of ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient, proof_provider: ProofProvider) -> None:
        self._client = client
        self._proof_provider = proof_provider

    async def __call__(self, url: str, options: Mapping[str, Any]) -> HttpResponse:
        options = dict(options)
        method = str(options.pop("method", "POST")).upper()
        mode = options.pop(TRANSPORT_OPTION, None)
        headers = dict(options.pop("headers", None) or {})
        body = options.pop("body", None)
        payload: dict[str, Any] | None = dict(body) if body is not None else None

        headers.update(await self._proof_provider.auth_headers(method, url))
        if mode is not None:
            proof = await self._proof_provider.payment_proof(method, url)
            if not proof:
                raise ProofUnavailableError(f"no payment proof available for {method} {url}")
            serialized = serialize_proof(proof)
            size = len(serialized.encode("utf-8"))
            framing = resolve_transport(mode, size)
            logger.debug("payment.framing mode={} framing={} bytes={}", mode, framing, size)
            if framing == "header":
                headers[PAYMENT_HEADER] = serialized
            else:
                payload = {**(payload or {}), PAYMENT_BODY_FIELD: serialized}

        response = await self._client.request(method, url, headers=headers, json=payload)
        return HttpResponse(response)


class HttpxPlainFetch:
    """Unauthenticated call capability."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def __call__(self, url: str, options: Mapping[str, Any]) -> HttpResponse:
        method = str(options.get("method", "GET")).upper()
        response = await self._client.request(method, url)
        return HttpResponse(response)


def build_http_client(timeout_seconds: float | None = None) -> httpx.AsyncClient:
    """Create the shared async client; ``None`` disables timeouts."""

    return httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True)
