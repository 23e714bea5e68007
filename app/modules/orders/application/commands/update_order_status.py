# 📄 File: app/modules/orders/application/commands/update_order_status.py
# 🧭 Purpose (Layman Explanation):
# The "move this order along" request: confirm it, mark it ready, picked up, delivered,
# or cancel/reject it with a reason.
# 🧪 Purpose (Technical Summary):
# CQRS command for a status transition requested by a restaurant, delivery partner or admin.
# 🔗 Dependencies:
# pydantic, order domain enums
# 🔄 Connected Modules / Calls From:
# UpdateOrderStatusHandler, orders API (PUT /api/orders/{id}/status)

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.orders.domain.models.order import OrderStatus


class UpdateOrderStatusCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    status: OrderStatus
    reason: Optional[str] = Field(None, max_length=500)
