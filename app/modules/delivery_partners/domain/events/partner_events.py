# 📄 File: app/modules/delivery_partners/domain/events/partner_events.py
# 🧭 Purpose (Layman Explanation):
# Announces that a rider has moved, so anyone watching the rider or their order on a map
# can see the new position.
# 🧪 Purpose (Technical Summary):
# Domain event published on the in-process EventBus whenever a delivery partner's location
# changes, either directly or through an order tracking update.
# 🔗 Dependencies:
# app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# PartnerService.update_location, order tracking handler, realtime forwarding handler

from dataclasses import dataclass
from typing import List, Optional

from app.shared.core.event_bus import DomainEvent

PARTNER_LOCATION_UPDATED = "partner.location_updated"


@dataclass
class PartnerLocationUpdated(DomainEvent):
    """
    Fired when a delivery partner reports a new position.

    Payload keys: ``partner_id``, ``order_id`` (may be None),
    ``coordinates`` ([lon, lat]) and ``status`` (order status for tracking
    updates, None otherwise).
    """
    event_type: str = PARTNER_LOCATION_UPDATED
    aggregate_type: str = "delivery_partner"

    @classmethod
    def create(
        cls,
        partner_id: str,
        coordinates: List[float],
        order_id: Optional[str] = None,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> "PartnerLocationUpdated":
        return cls(
            aggregate_id=partner_id,
            user_id=user_id,
            payload={
                "partner_id": partner_id,
                "order_id": order_id,
                "coordinates": list(coordinates),
                "status": status,
            },
        )
