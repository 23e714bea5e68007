# 📄 File: app/modules/admin/domain/services/dashboard_service.py
# 🧭 Purpose (Layman Explanation):
# Gathers the numbers an admin wants at a glance: how many customers, restaurants and
# riders there are, how many orders sit in each step, and how much money delivered orders
# brought in for everyone.
# 🧪 Purpose (Technical Summary):
# Read-only aggregation over the user, restaurant, delivery partner and order repositories.
# Dashboard revenue covers delivered (settled) orders only. Reports cover a creation window
# and leave cancelled and rejected orders out of revenue.
# 🔗 Dependencies:
# repository interfaces of user_management, restaurants, delivery_partners and orders
# 🔄 Connected Modules / Calls From:
# app.modules.admin.presentation.api.v1.admin

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Depends

from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.shared.core.exceptions import ValidationError
from app.shared.utils.helpers import ensure_utc

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        restaurant_repository: RestaurantRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
        order_repository: OrderRepository = Depends(),
    ):
        self.user_repository = user_repository
        self.restaurant_repository = restaurant_repository
        self.partner_repository = partner_repository
        self.order_repository = order_repository

    async def get_dashboard(self) -> Dict[str, Any]:
        users_by_role = await self.user_repository.count_by_role()
        restaurants_by_status = await self.restaurant_repository.count_by_status()
        partners_by_status = await self.partner_repository.count_by_status()
        orders_by_status = await self.order_repository.count_by_status()
        revenue = await self.order_repository.delivered_revenue()

        logger.debug("Admin dashboard computed")
        return {
            "users": {"total": sum(users_by_role.values()), "by_role": users_by_role},
            "restaurants": {"total": sum(restaurants_by_status.values()), "by_status": restaurants_by_status},
            "delivery_partners": {"total": sum(partners_by_status.values()), "by_status": partners_by_status},
            "orders": {"total": sum(orders_by_status.values()), "by_status": orders_by_status},
            "revenue": revenue,
        }

    async def get_report(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        top: int = 5,
    ) -> Dict[str, Any]:
        """
        Platform report over orders created between ``start`` and ``end``.

        Raises:
            ValidationError: If ``start`` is after ``end``
        """
        start, end = ensure_utc(start), ensure_utc(end)
        if start is not None and end is not None and start > end:
            raise ValidationError("start_date must not be after end_date", field="start_date")

        revenue = await self.order_repository.revenue_report(start, end)
        orders_by_status = await self.order_repository.count_by_status(start, end)

        top_restaurants = await self.order_repository.top_restaurants(top, start, end)
        for row in top_restaurants:
            restaurant = await self.restaurant_repository.get_by_id(row["restaurant_id"])
            row["name"] = restaurant.name if restaurant else None

        top_partners = await self.order_repository.top_delivery_partners(top, start, end)
        for row in top_partners:
            partner = await self.partner_repository.get_by_id(row["delivery_partner_id"])
            user = await self.user_repository.get_by_id(partner.user_id) if partner else None
            row["name"] = user.name if user else None

        logger.debug(f"Admin report computed for {start} - {end}")
        return {
            "start_date": start,
            "end_date": end,
            "revenue": revenue,
            "orders_by_status": orders_by_status,
            "top_restaurants": top_restaurants,
            "top_delivery_partners": top_partners,
        }
