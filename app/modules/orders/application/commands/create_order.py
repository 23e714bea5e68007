# 📄 File: app/modules/orders/application/commands/create_order.py
# 🧭 Purpose (Layman Explanation):
# The "place an order" request: which restaurant, which dishes and how many, where to
# deliver and how the customer will pay.
# 🧪 Purpose (Technical Summary):
# CQRS command for order placement. Carries only caller-controlled input; prices, totals,
# order number and status are always computed server-side.
# 🔗 Dependencies:
# pydantic, app.shared.core.geo, order domain enums
# 🔄 Connected Modules / Calls From:
# CreateOrderHandler, orders API (POST /api/orders)

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.orders.domain.models.order import PaymentMethod
from app.shared.core.geo import Address


class OrderLineInput(BaseModel):
    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, le=100)
    special_instructions: Optional[str] = Field(None, max_length=500)


class CreateOrderCommand(BaseModel):
    """Place a new order on behalf of ``customer_id``."""

    model_config = ConfigDict(frozen=True)

    customer_id: str
    restaurant_id: str
    items: List[OrderLineInput] = Field(..., min_length=1)
    delivery_address: Address
    payment_method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=500)
