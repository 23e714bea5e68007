# 📄 File: app/modules/orders/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Answers "show me this order" and "show me my orders", only ever showing people the
# orders they are involved in.
#
# 🧪 Purpose (Technical Summary):
# CQRS query handlers for the order read side. Single-order reads are checked against the
# order access policy; lists are scoped by role (customer: own orders, restaurant: orders
# of the owned restaurant, delivery partner: assigned orders, admin: everything).
#
# 🔗 Dependencies:
# - app.modules.orders.application.queries
# - app.modules.orders.domain (repository interface, access policy)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.orders.presentation.api.v1.orders

__all__ = ["GetOrderHandler", "ListOrdersHandler"]

import logging
from typing import Any, Dict

from fastapi import Depends

from app.modules.orders.application.queries import GetOrderQuery, ListOrdersQuery
from app.modules.orders.domain.models.order import Order
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.orders.domain.services.access import OrderActorResolver, ensure_can_view
from app.shared.core.dependencies import ROLE_CUSTOMER, ROLE_DELIVERY, ROLE_RESTAURANT, CurrentUser
from app.shared.core.exceptions import NotFoundError
from app.shared.utils.helpers import total_pages

logger = logging.getLogger(__name__)


class GetOrderHandler:
    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        actor_resolver: OrderActorResolver = Depends(),
    ):
        self._order_repository = order_repository
        self._actor_resolver = actor_resolver

    async def handle(self, query: GetOrderQuery, current_user: CurrentUser) -> Order:
        order = await self._order_repository.get_by_id(query.order_id)
        if order is None:
            raise NotFoundError("Order not found", resource_type="order", resource_id=query.order_id)

        actor = await self._actor_resolver.resolve(current_user)
        ensure_can_view(actor, order)
        return order


class ListOrdersHandler:
    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        actor_resolver: OrderActorResolver = Depends(),
    ):
        self._order_repository = order_repository
        self._actor_resolver = actor_resolver

    async def handle(self, query: ListOrdersQuery, current_user: CurrentUser) -> Dict[str, Any]:
        """
        Returns:
            Dict with ``items``, ``total``, ``page`` and ``pages``
        """
        actor = await self._actor_resolver.resolve(current_user)
        scope: Dict[str, Any] = {}

        if actor.role == ROLE_CUSTOMER:
            scope["customer_id"] = actor.user_id
        elif actor.role == ROLE_RESTAURANT:
            if actor.restaurant_id is None:
                return _empty_page(query)
            scope["restaurant_id"] = actor.restaurant_id
        elif actor.role == ROLE_DELIVERY:
            if actor.partner_id is None:
                return _empty_page(query)
            scope["delivery_partner_id"] = actor.partner_id

        items, total = await self._order_repository.list(
            status=query.status,
            offset=query.offset,
            limit=query.limit,
            **scope,
        )
        return {
            "items": items,
            "total": total,
            "page": query.page,
            "pages": total_pages(total, query.limit),
        }


def _empty_page(query: ListOrdersQuery) -> Dict[str, Any]:
    return {"items": [], "total": 0, "page": query.page, "pages": 0}
