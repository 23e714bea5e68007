# 📄 File: app/modules/orders/domain/services/access.py
# 🧭 Purpose (Layman Explanation):
# Decides who is allowed to see or change an order: the customer who placed it, the
# restaurant cooking it, the rider delivering it, or an admin.
# 🧪 Purpose (Technical Summary):
# Resolves the authenticated caller into an OrderActor (with their restaurant and delivery
# partner ids looked up server-side) and applies the order access policy.
# 🔗 Dependencies:
# restaurant and delivery partner repositories, app.shared.core (dependencies, exceptions)
# 🔄 Connected Modules / Calls From:
# order command and query handlers, PaymentService, realtime websocket room checks

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends

from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.shared.core.dependencies import (
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_DELIVERY,
    ROLE_RESTAURANT,
    CurrentUser,
)
from app.shared.core.exceptions import AuthorizationError

from ..models.order import Order, OrderStatus
from .lifecycle import PARTNER_STATUSES


@dataclass(frozen=True)
class OrderActor:
    """The caller as seen by the order core."""

    user_id: str
    role: str
    restaurant_id: Optional[str] = None
    partner_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def is_customer_of(self, order: Order) -> bool:
        return self.role == ROLE_CUSTOMER and order.customer_id == self.user_id

    def owns_restaurant_of(self, order: Order) -> bool:
        return self.restaurant_id is not None and order.restaurant_id == self.restaurant_id

    def is_partner_of(self, order: Order) -> bool:
        return self.partner_id is not None and order.delivery_partner_id == self.partner_id


class OrderActorResolver:
    """Looks up the restaurant or delivery partner profile behind a user."""

    def __init__(
        self,
        restaurant_repository: RestaurantRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
    ):
        self.restaurant_repository = restaurant_repository
        self.partner_repository = partner_repository

    async def resolve(self, user: CurrentUser) -> OrderActor:
        restaurant_id = None
        partner_id = None

        if user.role == ROLE_RESTAURANT:
            restaurant = await self.restaurant_repository.get_by_owner(user.user_id)
            restaurant_id = restaurant.id if restaurant else None
        elif user.role == ROLE_DELIVERY:
            partner = await self.partner_repository.get_by_user(user.user_id)
            partner_id = partner.id if partner else None

        return OrderActor(
            user_id=user.user_id,
            role=user.role,
            restaurant_id=restaurant_id,
            partner_id=partner_id,
        )


def can_view_order(actor: OrderActor, order: Order) -> bool:
    return (
        actor.is_admin
        or order.customer_id == actor.user_id
        or actor.owns_restaurant_of(order)
        or actor.is_partner_of(order)
    )


def ensure_can_view(actor: OrderActor, order: Order) -> None:
    if not can_view_order(actor, order):
        raise AuthorizationError(
            "Not authorized to view this order",
            resource_type="order",
            resource_id=order.id,
        )


def ensure_can_change_status(actor: OrderActor, order: Order, target: OrderStatus) -> None:
    """
    Owning restaurant and admins may request any status; the assigned
    delivery partner only the delivery-side ones; customers never.
    """
    if actor.is_admin or actor.owns_restaurant_of(order):
        return
    if actor.is_partner_of(order) and target in PARTNER_STATUSES:
        return
    raise AuthorizationError(
        "Not authorized to update this order",
        resource_type="order",
        resource_id=order.id,
    )
