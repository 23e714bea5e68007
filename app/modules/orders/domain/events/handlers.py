# 📄 File: app/modules/orders/domain/events/handlers.py
# 🧭 Purpose (Layman Explanation):
# Writes a clear record in the logs every time an order is placed, moves along, is paid
# out or rated, so the business can follow what happened.
# 🧪 Purpose (Technical Summary):
# Audit event handler turning order domain events into structured business-event log
# records (python-json-logger fields) for analytics and support.
# 🔗 Dependencies:
# app.shared.core.event_bus, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# Subscribed on the EventBus in app.main lifespan

import logging
from typing import List

from app.shared.core.event_bus import DomainEvent, EventHandler
from app.shared.utils.logging import log_business_event

from .order_events import ORDER_PLACED, ORDER_RATED, ORDER_SETTLED, ORDER_STATUS_CHANGED

logger = logging.getLogger(__name__)

DESCRIPTIONS = {
    ORDER_PLACED: "Order placed",
    ORDER_STATUS_CHANGED: "Order status changed",
    ORDER_SETTLED: "Order settled",
    ORDER_RATED: "Order rated",
}


class OrderAuditHandler(EventHandler):
    """Logs every order lifecycle event as a business event."""

    @property
    def event_types(self) -> List[str]:
        return list(DESCRIPTIONS)

    async def handle(self, event: DomainEvent) -> None:
        log_business_event(
            logger,
            event.event_type,
            DESCRIPTIONS.get(event.event_type, event.event_type),
            entity_id=event.aggregate_id,
            entity_type=event.aggregate_type,
            actor_id=event.user_id,
            domain_event_id=event.event_id,
            payload=event.payload,
        )
