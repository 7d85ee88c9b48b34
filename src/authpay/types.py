"""Shared data records for dispatched calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal, TypeAlias

ActionKey: TypeAlias = str
Accent: TypeAlias = Literal["emerald", "amber", "violet", "cyan", "sky"]
Framing: TypeAlias = Literal["header", "body"]


class TransportMode(StrEnum):
    """Where payment proof material is placed in a paid request."""

    HEADER = "header"
    BODY = "body"
    AUTO = "auto"


@dataclass(frozen=True)
class RequestOutcome:
    """Normalized result of one completed call."""

    data: Any
    status: int
    duration_ms: int
    transport: TransportMode | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def txid(self) -> str | None:
        """Transaction id reported by the server for a settled payment, if any."""
        if not isinstance(self.data, dict):
            return None
        payment = self.data.get("payment")
        if not isinstance(payment, dict):
            return None
        txid = payment.get("txid")
        return txid if isinstance(txid, str) and txid else None


@dataclass(frozen=True)
class ResultEntry:
    """One row of the result log."""

    id: int
    title: str
    outcome: RequestOutcome
    accent: Accent


@dataclass(frozen=True)
class Ok:
    outcome: RequestOutcome

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    message: str

    @property
    def ok(self) -> bool:
        return False


DispatchResult: TypeAlias = Ok | Err
