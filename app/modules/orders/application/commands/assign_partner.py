# 📄 File: app/modules/orders/application/commands/assign_partner.py
# 🧭 Purpose (Layman Explanation):
# Puts a rider on an order: a rider accepting it themselves, or the restaurant or an admin
# choosing one.
# 🧪 Purpose (Technical Summary):
# CQRS command binding a delivery partner to an order. ``delivery_partner_id`` is ignored
# for self-assignment by a delivery partner.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# AssignPartnerHandler, orders API (PUT /api/orders/{id}/assign)

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AssignPartnerCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    delivery_partner_id: Optional[str] = None
