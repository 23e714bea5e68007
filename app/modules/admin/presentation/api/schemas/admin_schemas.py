# 📄 File: app/modules/admin/presentation/api/schemas/admin_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the admin's user list, the "suspend or reactivate" request and the
# platform report.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for admin user management and reports; money is
# rendered as floats like the rest of the API.
# 🔗 Dependencies:
# pydantic, app.modules.user_management.presentation.api.schemas.auth_schemas
# 🔄 Connected Modules / Calls From:
# app.modules.admin.presentation.api.v1.admin

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from app.modules.user_management.presentation.api.schemas.auth_schemas import UserResponse


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    pages: int


class UserStatusUpdateRequest(BaseModel):
    """Admins may only suspend or reactivate accounts."""

    status: Literal["active", "suspended"]


class RevenueReport(BaseModel):
    total_orders: int
    billed_orders: int
    total_revenue: float
    average_order_value: float
    platform_earnings: float
    restaurant_earnings: float
    delivery_partner_earnings: float


class TopRestaurant(BaseModel):
    restaurant_id: str
    name: Optional[str] = None
    total_orders: int
    total_revenue: float
    average_rating: Optional[float] = None


class TopDeliveryPartner(BaseModel):
    delivery_partner_id: str
    name: Optional[str] = None
    total_deliveries: int
    total_earnings: float
    average_rating: Optional[float] = None


class ReportResponse(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    revenue: RevenueReport
    orders_by_status: Dict[str, int]
    top_restaurants: List[TopRestaurant]
    top_delivery_partners: List[TopDeliveryPartner]

    @classmethod
    def from_report(cls, report: Dict[str, Any]) -> "ReportResponse":
        return cls(
            start_date=report["start_date"],
            end_date=report["end_date"],
            revenue=RevenueReport(**report["revenue"]),
            orders_by_status=report["orders_by_status"],
            top_restaurants=[TopRestaurant(**row) for row in report["top_restaurants"]],
            top_delivery_partners=[TopDeliveryPartner(**row) for row in report["top_delivery_partners"]],
        )
