"""Payment transport selection."""

from __future__ import annotations

from authpay.types import Framing, TransportMode

AUTO_BODY_THRESHOLD_BYTES = 6144
PAYMENT_HEADER = "x-bsv-payment"
PAYMENT_BODY_FIELD = "payment"
TRANSPORT_OPTION = "paymentTransport"


def resolve_transport(mode: TransportMode | str, payload_size: int | None = None) -> Framing:
    """Decide whether payment proof goes in a header or in the request body.

    ``auto`` compares the serialized proof size against
    ``AUTO_BODY_THRESHOLD_BYTES``: strictly below stays in the header, anything
    at or above moves to the body. Header size limits are left to the server.
    """

    mode = TransportMode(mode)
    if mode is TransportMode.HEADER:
        return "header"
    if mode is TransportMode.BODY:
        return "body"
    if payload_size is None:
        raise ValueError("auto transport requires the payment proof size")
    if payload_size < 0:
        raise ValueError(f"payment proof size cannot be negative: {payload_size}")
    return "header" if payload_size < AUTO_BODY_THRESHOLD_BYTES else "body"


def transport_options(mode: TransportMode | str | None) -> dict[str, str]:
    """Options handed to the auth capability for one paid call."""

    if mode is None:
        return {}
    return {TRANSPORT_OPTION: TransportMode(mode).value}
