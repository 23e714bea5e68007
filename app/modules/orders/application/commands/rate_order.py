# 📄 File: app/modules/orders/application/commands/rate_order.py
# 🧭 Purpose (Layman Explanation):
# The customer's star rating (and optional review) for a delivered order.
# 🧪 Purpose (Technical Summary):
# CQRS command recording a one-time 1..5 rating.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# RateOrderHandler, orders API (PUT /api/orders/{id}/rating)

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RateOrderCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = Field(None, max_length=1000)
