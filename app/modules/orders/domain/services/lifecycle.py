# 📄 File: app/modules/orders/domain/services/lifecycle.py
# 🧭 Purpose (Layman Explanation):
# The rulebook for how an order moves along: from placed, to cooking, to on its way, to
# delivered, and which steps are allowed and who may take them.
# 🧪 Purpose (Technical Summary):
# Explicit order state machine: transition table, terminal states, the statuses a delivery
# partner may request, the statuses that require an assigned partner, and delivery duration.
# 🔗 Dependencies:
# order domain model, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# UpdateOrderStatusHandler, AssignPartnerHandler, PaymentService, unit tests

from datetime import datetime
from typing import Dict, FrozenSet

from app.shared.core.exceptions import InvalidStateError

from ..models.order import OrderStatus

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED, OrderStatus.REJECTED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED, OrderStatus.REJECTED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.PICKED_UP, OrderStatus.CANCELLED}),
    OrderStatus.PICKED_UP: frozenset({OrderStatus.DELIVERING}),
    OrderStatus.DELIVERING: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REJECTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

# Statuses the assigned delivery partner may request
PARTNER_STATUSES = frozenset({
    OrderStatus.PICKED_UP,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
})

# Statuses that can only be entered with a partner assigned
REQUIRES_PARTNER = frozenset({
    OrderStatus.PICKED_UP,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
})

# Statuses during which a partner may be assigned
ASSIGNABLE_STATUSES = frozenset({
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
})

# Statuses a tracking entry may carry
TRACKING_STATUSES = frozenset({
    OrderStatus.PICKED_UP,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
})


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    """
    Raise unless ``current -> target`` is a legal transition.

    Raises:
        InvalidStateError: For illegal transitions, including setting the
            current status again and leaving a terminal status
    """
    if not can_transition(current, target):
        raise InvalidStateError(
            f"Cannot change order status from {current.value} to {target.value}",
            rule="order_transition",
            current_state=current.value,
        )


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def delivery_minutes(placed_at: datetime, delivered_at: datetime) -> float:
    """Minutes between placement and delivery, to two decimals."""
    return round((delivered_at - placed_at).total_seconds() / 60, 2)
