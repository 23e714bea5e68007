# 📄 File: app/modules/orders/application/commands/add_tracking.py
# 🧭 Purpose (Layman Explanation):
# The rider's "here I am" ping for an order they are carrying.
# 🧪 Purpose (Technical Summary):
# CQRS command appending an entry to an order's tracking log.
# 🔗 Dependencies:
# pydantic, app.shared.core.geo
# 🔄 Connected Modules / Calls From:
# AddTrackingHandler, orders API (PUT /api/orders/{id}/tracking)

from pydantic import BaseModel, ConfigDict

from app.modules.orders.domain.models.order import OrderStatus
from app.shared.core.geo import GeoPoint


class AddTrackingCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    status: OrderStatus
    location: GeoPoint
