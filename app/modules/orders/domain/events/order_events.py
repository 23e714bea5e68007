# 📄 File: app/modules/orders/domain/events/order_events.py
# 🧭 Purpose (Layman Explanation):
# Announcements the ordering system makes when something important happens to an order:
# it was placed, it moved to a new step, the money was split, or the customer rated it.
# 🧪 Purpose (Technical Summary):
# Domain events for the order lifecycle, published on the in-process EventBus after the
# state change has been applied.
# 🔗 Dependencies:
# app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# order command handlers, payment service, audit and realtime event handlers

from dataclasses import dataclass
from typing import Optional

from app.shared.core.event_bus import DomainEvent

ORDER_PLACED = "order.placed"
ORDER_STATUS_CHANGED = "order.status_changed"
ORDER_SETTLED = "order.settled"
ORDER_RATED = "order.rated"


@dataclass
class OrderPlaced(DomainEvent):
    """Payload: ``order_number``, ``restaurant_id``, ``customer_id``, ``total``."""
    event_type: str = ORDER_PLACED
    aggregate_type: str = "order"


@dataclass
class OrderStatusChanged(DomainEvent):
    """
    Payload: ``order_id``, ``order_number``, ``previous_status``, ``status``,
    ``restaurant_id``, ``customer_id``, ``delivery_partner_id``, ``reason``.
    """
    event_type: str = ORDER_STATUS_CHANGED
    aggregate_type: str = "order"

    @classmethod
    def create(
        cls,
        order,
        previous_status: str,
        user_id: Optional[str] = None,
    ) -> "OrderStatusChanged":
        return cls(
            aggregate_id=order.id,
            user_id=user_id,
            payload={
                "order_id": order.id,
                "order_number": order.order_number,
                "previous_status": previous_status,
                "status": order.status.value,
                "payment_status": order.payment_status.value,
                "restaurant_id": order.restaurant_id,
                "customer_id": order.customer_id,
                "delivery_partner_id": order.delivery_partner_id,
                "reason": order.cancellation_reason,
            },
        )


@dataclass
class OrderSettled(DomainEvent):
    """Payload: the three earnings shares and the delivery time in minutes."""
    event_type: str = ORDER_SETTLED
    aggregate_type: str = "order"


@dataclass
class OrderRated(DomainEvent):
    """Payload: ``rating``, ``restaurant_id``, ``delivery_partner_id``."""
    event_type: str = ORDER_RATED
    aggregate_type: str = "order"
