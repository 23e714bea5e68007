# 📄 File: app/modules/orders/application/queries/get_order.py
# 🧭 Purpose (Layman Explanation):
# The "show me this order" and "show me my orders" questions.
# 🧪 Purpose (Technical Summary):
# CQRS queries for a single order and a role-scoped, paginated order list.
# 🔗 Dependencies:
# pydantic, order domain enums
# 🔄 Connected Modules / Calls From:
# order query handlers, orders API (GET /api/orders, GET /api/orders/{id})

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.orders.domain.models.order import OrderStatus


class GetOrderQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str


class ListOrdersQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
