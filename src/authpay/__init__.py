"""authpay - demo client for an authenticated, pay-per-request HTTP server."""

from .dispatcher import RequestDispatcher, SessionState
from .store import ResultStore
from .transport import AUTO_BODY_THRESHOLD_BYTES, resolve_transport
from .types import Err, Ok, RequestOutcome, ResultEntry, TransportMode

__version__ = "0.1.0"

__all__ = [
    "AUTO_BODY_THRESHOLD_BYTES",
    "Err",
    "Ok",
    "RequestDispatcher",
    "RequestOutcome",
    "ResultEntry",
    "ResultStore",
    "SessionState",
    "TransportMode",
    "resolve_transport",
]
