"""Order status transition rules.

Forward-only happy path PENDING -> IN_TRANSIT -> DELIVERED, plus the single
cancellation edge PENDING -> CANCELED. DELIVERED and CANCELED are terminal.
"""

from shiptrack.domain.enums import OrderStatus
from shiptrack.domain.exceptions import InvalidTransitionException

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_TRANSIT, OrderStatus.CANCELED}),
    OrderStatus.IN_TRANSIT: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELED: frozenset(),
}

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def is_terminal(status: OrderStatus) -> bool:
    """Return True if no transition is legal out of status."""
    return status in TERMINAL_STATUSES


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Return True if current -> target is a legal edge."""
    return target in ALLOWED_TRANSITIONS[current]


def ensure_status_update_allowed(
    order_id: str, current: OrderStatus, target: OrderStatus
) -> None:
    """Raise InvalidTransitionException unless current -> target is a legal edge.

    Terminal states are checked first so their message does not depend on target.
    """
    if is_terminal(current):
        raise InvalidTransitionException(
            f"Cannot update {current.value.lower()} orders",
            order_id=order_id,
            current_status=current.value,
            requested_status=target.value,
        )
    if not can_transition(current, target):
        raise InvalidTransitionException(
            f"Cannot change order status from {current.value} to {target.value}",
            order_id=order_id,
            current_status=current.value,
            requested_status=target.value,
        )


def ensure_cancel_allowed(order_id: str, current: OrderStatus) -> None:
    """Raise InvalidTransitionException unless current status is exactly PENDING."""
    if current is not OrderStatus.PENDING:
        raise InvalidTransitionException(
            "Only pending orders can be canceled",
            order_id=order_id,
            current_status=current.value,
            requested_status=OrderStatus.CANCELED.value,
        )
