"""Domain service: Order Workflow.

Orders move strictly forward through

    pending -> processing -> shipped -> delivered

Moving forward (possibly skipping states) or re-applying the current
status is allowed. Moving backward raises InvalidTransitionError, and so
does any status change at all once an order is delivered, including
delivered again.

Older clients could pick any status from a menu without these checks.
``force_status`` keeps that behaviour available as an explicit, logged
escape hatch.
"""

from __future__ import annotations

import logging

from storeops.domain.exceptions import InvalidTransitionError
from storeops.domain.model.order import Order, OrderStatus

logger = logging.getLogger(__name__)

ORDER_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED})


def _rank(status: OrderStatus) -> int:
    return ORDER_FLOW.index(status)


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    if current in TERMINAL_STATUSES:
        return False
    return _rank(new) >= _rank(current)


def allowed_next_statuses(current: OrderStatus) -> list[OrderStatus]:
    return [s for s in ORDER_FLOW if s is not current and can_transition(current, s)]


def set_status(order: Order, new_status: OrderStatus) -> Order:
    current = order.status
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Order {order.order_number or order.id} is already {current.value}; "
            f"no further status changes are allowed"
        )
    if not can_transition(current, new_status):
        raise InvalidTransitionError(
            f"Cannot move order {order.order_number or order.id} back from "
            f"{current.value} to {new_status.value}"
        )
    order.status = new_status
    return order


def force_status(order: Order, new_status: OrderStatus) -> Order:
    if not can_transition(order.status, new_status):
        logger.warning(
            "Forcing order %s from %s to %s",
            order.order_number or order.id, order.status.value, new_status.value,
        )
    order.status = new_status
    return order
