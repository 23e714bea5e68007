# 📄 File: app/modules/orders/application/handlers/event_handlers.py
# 🧭 Purpose (Layman Explanation):
# Passes order updates and rider positions on to the people watching live: the customer's
# order screen, the restaurant dashboard and the rider app.
#
# 🧪 Purpose (Technical Summary):
# EventBus handler forwarding order and partner domain events to realtime rooms:
# order.status_changed -> ``orderStatusChanged`` on ``order:<id>``;
# partner.location_updated -> ``partnerLocationUpdated`` on ``delivery:<partner_id>``
# and, for tracking updates, ``order:<order_id>``.
#
# 🔗 Dependencies:
# - app.shared.core.event_bus
# - app.shared.infrastructure.realtime.connection_registry
#
# 🔄 Connected Modules / Calls From:
# - Subscribed on the EventBus in app.main lifespan

import logging
from typing import List, Optional

from app.modules.delivery_partners.domain.events.partner_events import PARTNER_LOCATION_UPDATED
from app.modules.orders.domain.events.order_events import ORDER_STATUS_CHANGED
from app.shared.core.event_bus import DomainEvent, EventHandler
from app.shared.infrastructure.realtime.connection_registry import (
    ConnectionRegistry,
    delivery_room,
    get_connection_registry,
    order_room,
)

logger = logging.getLogger(__name__)

ORDER_STATUS_CHANGED_MESSAGE = "orderStatusChanged"
PARTNER_LOCATION_UPDATED_MESSAGE = "partnerLocationUpdated"


class RealtimeForwardingHandler(EventHandler):
    """Fans domain events out to websocket rooms."""

    def __init__(self, registry: Optional[ConnectionRegistry] = None):
        self._registry = registry

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry or get_connection_registry()

    @property
    def event_types(self) -> List[str]:
        return [ORDER_STATUS_CHANGED, PARTNER_LOCATION_UPDATED]

    async def handle(self, event: DomainEvent) -> None:
        payload = {**event.payload, "timestamp": event.timestamp.isoformat()}

        if event.event_type == ORDER_STATUS_CHANGED:
            await self.registry.publish(order_room(event.aggregate_id), ORDER_STATUS_CHANGED_MESSAGE, payload)

        elif event.event_type == PARTNER_LOCATION_UPDATED:
            await self.registry.publish(
                delivery_room(event.payload["partner_id"]),
                PARTNER_LOCATION_UPDATED_MESSAGE,
                payload,
            )
            order_id = event.payload.get("order_id")
            if order_id:
                await self.registry.publish(order_room(order_id), PARTNER_LOCATION_UPDATED_MESSAGE, payload)
