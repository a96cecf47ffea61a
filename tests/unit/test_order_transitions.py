"""Tests for order status transition rules."""

import pytest

from shiptrack.domain.enums import OrderStatus
from shiptrack.domain.exceptions import InvalidTransitionException
from shiptrack.domain.order_transitions import (
    can_transition,
    ensure_cancel_allowed,
    ensure_status_update_allowed,
    is_terminal,
)

P, T, D, C = (
    OrderStatus.PENDING,
    OrderStatus.IN_TRANSIT,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELED,
)


@pytest.mark.parametrize("current,target", [(P, T), (T, D), (P, C)])
def test_legal_edges(current: OrderStatus, target: OrderStatus) -> None:
    assert can_transition(current, target)
    ensure_status_update_allowed("o1", current, target)


@pytest.mark.parametrize(
    "current,target",
    [(P, P), (P, D), (T, P), (T, T), (T, C)],
)
def test_illegal_edges_from_open_states(current: OrderStatus, target: OrderStatus) -> None:
    with pytest.raises(InvalidTransitionException) as exc_info:
        ensure_status_update_allowed("o1", current, target)
    assert exc_info.value.details == {
        "order_id": "o1",
        "current_status": current.value,
        "requested_status": target.value,
    }


@pytest.mark.parametrize("terminal", [D, C])
@pytest.mark.parametrize("target", list(OrderStatus))
def test_terminal_states_reject_everything(terminal: OrderStatus, target: OrderStatus) -> None:
    assert is_terminal(terminal)
    with pytest.raises(InvalidTransitionException, match="Cannot update"):
        ensure_status_update_allowed("o1", terminal, target)


def test_cancel_only_from_pending() -> None:
    ensure_cancel_allowed("o1", P)
    for status in (T, D, C):
        with pytest.raises(InvalidTransitionException, match="Only pending orders"):
            ensure_cancel_allowed("o1", status)
