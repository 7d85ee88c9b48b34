"""Catalog of user-triggered actions."""

from __future__ import annotations

from dataclasses import dataclass

from authpay.errors import UnknownActionError
from authpay.types import Accent, TransportMode

PRICE_SATS = 10


@dataclass(frozen=True)
class ActionSpec:
    """One action the user can trigger against the demo server."""

    key: str
    title: str
    accent: Accent
    path: str
    method: str = "POST"
    transport: TransportMode | None = None
    label: str = ""
    detail: str = ""

    @property
    def authenticated(self) -> bool:
        return self.method != "GET"

    @property
    def paid(self) -> bool:
        return self.transport is not None


ACTIONS: dict[str, ActionSpec] = {
    action.key: action
    for action in (
        ActionSpec("free", "Free Endpoint", "emerald", "/free", label="POST /free", detail="Auth only"),
        ActionSpec("balance", "Server Balance", "sky", "/balance", method="GET", label="GET /balance", detail="No auth"),
        ActionSpec(
            "paid-header",
            "Paid (Header)",
            "amber",
            "/paid",
            transport=TransportMode.HEADER,
            label="Classic",
            detail="Payment in HTTP header",
        ),
        ActionSpec(
            "paid-body",
            "Paid (Body)",
            "violet",
            "/paid",
            transport=TransportMode.BODY,
            label="Large TX",
            detail="Payment in request body",
        ),
        ActionSpec(
            "paid-auto",
            "Paid (Auto)",
            "cyan",
            "/paid",
            transport=TransportMode.AUTO,
            label="Smart",
            detail="Size-based detection",
        ),
    )
}


def get_action(key: str) -> ActionSpec:
    normalized = key.strip().lower()
    try:
        return ACTIONS[normalized]
    except KeyError:
        known = ", ".join(ACTIONS)
        raise UnknownActionError(f"unknown action '{key}' (expected one of: {known})") from None
