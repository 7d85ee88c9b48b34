import pytest

from authpay.actions import ACTIONS, get_action
from authpay.errors import UnknownActionError
from authpay.types import TransportMode


def test_catalog_matches_demo_buttons() -> None:
    assert list(ACTIONS) == ["free", "balance", "paid-header", "paid-body", "paid-auto"]
    assert ACTIONS["balance"].method == "GET"
    assert ACTIONS["balance"].authenticated is False
    assert ACTIONS["free"].paid is False
    assert [ACTIONS[key].transport for key in ("paid-header", "paid-body", "paid-auto")] == [
        TransportMode.HEADER,
        TransportMode.BODY,
        TransportMode.AUTO,
    ]


def test_get_action_normalizes_key() -> None:
    assert get_action(" Paid-Auto ").key == "paid-auto"


def test_get_action_rejects_unknown_key() -> None:
    with pytest.raises(UnknownActionError, match="unknown action 'refund'"):
        get_action("refund")
