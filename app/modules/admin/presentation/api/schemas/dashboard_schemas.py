# 📄 File: app/modules/admin/presentation/api/schemas/dashboard_schemas.py
# 🧭 Purpose (Layman Explanation):
# How the admin overview looks when the app sends it.
# 🧪 Purpose (Technical Summary):
# Pydantic response schema for the admin dashboard; money rendered as floats.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# app.modules.admin.presentation.api.v1.admin

from typing import Any, Dict

from pydantic import BaseModel


class UserCounts(BaseModel):
    total: int
    by_role: Dict[str, int]


class StatusCounts(BaseModel):
    total: int
    by_status: Dict[str, int]


class RevenueSummary(BaseModel):
    gross_revenue: float
    platform_earnings: float
    restaurant_earnings: float
    delivery_partner_earnings: float


class DashboardResponse(BaseModel):
    users: UserCounts
    restaurants: StatusCounts
    delivery_partners: StatusCounts
    orders: StatusCounts
    revenue: RevenueSummary

    @classmethod
    def from_summary(cls, summary: Dict[str, Any]) -> "DashboardResponse":
        return cls(
            users=UserCounts(**summary["users"]),
            restaurants=StatusCounts(**summary["restaurants"]),
            delivery_partners=StatusCounts(**summary["delivery_partners"]),
            orders=StatusCounts(**summary["orders"]),
            revenue=RevenueSummary(**{name: float(value) for name, value in summary["revenue"].items()}),
        )
