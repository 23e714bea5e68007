# 📄 File: app/modules/orders/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# The workers that carry out order requests: placing an order, moving it along, adding a
# rider's location, rating it and putting a rider on it. Each checks the caller is allowed
# to do it before touching anything.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for the order write side. Every mutation loads the order (and any
# restaurant/partner ledger it touches) with a row lock inside the request transaction,
# applies authorization, then the domain rules, persists and publishes domain events.
#
# 🔗 Dependencies:
# - app.modules.orders.application.commands
# - app.modules.orders.domain (models, services, events, repository interface)
# - restaurant, delivery partner and user repositories
# - app.shared.core (event bus, exceptions, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.orders.presentation.api.v1.orders (one handler per endpoint)

__all__ = [
    "CreateOrderHandler",
    "UpdateOrderStatusHandler",
    "AddTrackingHandler",
    "RateOrderHandler",
    "AssignPartnerHandler",
]

import logging
from datetime import timedelta

from fastapi import Depends

from app.modules.delivery_partners.domain.events.partner_events import PartnerLocationUpdated
from app.modules.delivery_partners.domain.models.delivery_partner import PartnerStatus
from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.orders.application.commands import (
    AddTrackingCommand,
    AssignPartnerCommand,
    CreateOrderCommand,
    RateOrderCommand,
    UpdateOrderStatusCommand,
)
from app.modules.orders.domain.events.order_events import OrderPlaced, OrderRated
from app.modules.orders.domain.models.order import Order, OrderStatus, TrackingEntry
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.orders.domain.services.access import (
    OrderActorResolver,
    ensure_can_change_status,
)
from app.modules.orders.domain.services.lifecycle import (
    ASSIGNABLE_STATUSES,
    TRACKING_STATUSES,
    is_terminal,
)
from app.modules.orders.domain.services.order_number import generate_order_number
from app.modules.orders.domain.services.pricing import RequestedItem, price_order
from app.modules.orders.domain.services.settlement import incremental_mean
from app.modules.orders.domain.services.transition_service import OrderTransitionService
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.shared.config.settings import get_settings
from app.shared.core.dependencies import ROLE_ADMIN, ROLE_DELIVERY, CurrentUser
from app.shared.core.event_bus import EventBus, get_event_bus
from app.shared.core.exceptions import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)


async def _load_locked(order_repository: OrderRepository, order_id: str) -> Order:
    order = await order_repository.get_for_update(order_id)
    if order is None:
        raise NotFoundError("Order not found", resource_type="order", resource_id=order_id)
    return order


class CreateOrderHandler:
    """
    Places an order: prices it against the live menu, assigns an order
    number and ETA, and records the placement on the restaurant and customer.
    """

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        restaurant_repository: RestaurantRepository = Depends(),
        user_repository: UserRepository = Depends(),
        event_bus: EventBus = Depends(get_event_bus),
    ):
        self._order_repository = order_repository
        self._restaurant_repository = restaurant_repository
        self._user_repository = user_repository
        self._event_bus = event_bus
        self._settings = get_settings()

    async def handle(self, command: CreateOrderCommand) -> Order:
        restaurant = await self._restaurant_repository.get_for_update(command.restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found", resource_type="restaurant", resource_id=command.restaurant_id)
        if not restaurant.is_accepting_orders:
            raise InvalidStateError(
                "Restaurant is not accepting orders",
                rule="restaurant_open",
                current_state=restaurant.status.value,
            )

        items, totals = price_order(
            restaurant,
            [
                RequestedItem(
                    menu_item_id=line.menu_item_id,
                    quantity=line.quantity,
                    special_instructions=line.special_instructions,
                )
                for line in command.items
            ],
            tax_rate=self._settings.TAX_RATE,
        )

        now = utcnow()
        order = Order(
            order_number=generate_order_number(now),
            customer_id=command.customer_id,
            restaurant_id=restaurant.id,
            items=items,
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            tax=totals.tax,
            total=totals.total,
            payment_method=command.payment_method,
            delivery_address=command.delivery_address,
            notes=command.notes,
            estimated_delivery_time=now + timedelta(minutes=self._settings.ESTIMATED_DELIVERY_MINUTES),
            created_at=now,
            updated_at=now,
        )
        order = await self._order_repository.create(order)

        restaurant.total_orders += 1
        restaurant.total_revenue = restaurant.total_revenue + order.total
        await self._restaurant_repository.update(restaurant)
        await self._user_repository.record_order_placed(command.customer_id, order.total)

        await self._event_bus.publish(
            OrderPlaced(
                aggregate_id=order.id,
                user_id=command.customer_id,
                payload={
                    "order_number": order.order_number,
                    "restaurant_id": order.restaurant_id,
                    "customer_id": order.customer_id,
                    "total": str(order.total),
                },
            )
        )
        return order


class UpdateOrderStatusHandler:
    """Status changes requested through the API."""

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        actor_resolver: OrderActorResolver = Depends(),
        transition_service: OrderTransitionService = Depends(),
    ):
        self._order_repository = order_repository
        self._actor_resolver = actor_resolver
        self._transition_service = transition_service

    async def handle(self, command: UpdateOrderStatusCommand, current_user: CurrentUser) -> Order:
        order = await _load_locked(self._order_repository, command.order_id)
        actor = await self._actor_resolver.resolve(current_user)
        ensure_can_change_status(actor, order, command.status)

        return await self._transition_service.transition(
            order,
            command.status,
            actor_id=current_user.user_id,
            reason=command.reason,
        )


class AddTrackingHandler:
    """
    Appends a tracking entry for the assigned delivery partner. The order's
    status is left alone; the entry only records where the partner was.
    """

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
        event_bus: EventBus = Depends(get_event_bus),
    ):
        self._order_repository = order_repository
        self._partner_repository = partner_repository
        self._event_bus = event_bus

    async def handle(self, command: AddTrackingCommand, current_user: CurrentUser) -> Order:
        order = await _load_locked(self._order_repository, command.order_id)

        partner = await self._partner_repository.get_by_user(current_user.user_id)
        if partner is None or order.delivery_partner_id != partner.id:
            raise AuthorizationError(
                "Only the assigned delivery partner can update tracking",
                resource_type="order",
                resource_id=order.id,
            )
        if command.status not in TRACKING_STATUSES:
            raise ValidationError(
                "Tracking status must be one of: " + ", ".join(sorted(s.value for s in TRACKING_STATUSES)),
                field="status",
                value=command.status.value,
            )
        if is_terminal(order.status) and order.status != OrderStatus.DELIVERED:
            raise InvalidStateError(
                "Cannot track a cancelled or rejected order",
                rule="tracking_open",
                current_state=order.status.value,
            )

        partner = await self._partner_repository.get_for_update(partner.id)
        if partner is None:
            raise NotFoundError(
                "Delivery partner not found",
                resource_type="delivery_partner",
                resource_id=order.delivery_partner_id,
            )

        entry = await self._order_repository.append_tracking(
            order.id,
            TrackingEntry(
                sequence=len(order.tracking) + 1,
                status=command.status,
                location=command.location,
            ),
        )

        partner.current_location = entry.location
        partner.last_active = entry.timestamp
        await self._partner_repository.update(partner)

        await self._event_bus.publish(
            PartnerLocationUpdated.create(
                partner.id,
                entry.location.coordinates,
                order_id=order.id,
                status=entry.status.value,
                user_id=current_user.user_id,
            )
        )
        logger.debug(f"Tracking #{entry.sequence} recorded for order {order.order_number}")

        return await self._order_repository.get_by_id(order.id)


class RateOrderHandler:
    """One-time customer rating, folded into restaurant and partner averages."""

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        restaurant_repository: RestaurantRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
        event_bus: EventBus = Depends(get_event_bus),
    ):
        self._order_repository = order_repository
        self._restaurant_repository = restaurant_repository
        self._partner_repository = partner_repository
        self._event_bus = event_bus

    async def handle(self, command: RateOrderCommand, current_user: CurrentUser) -> Order:
        order = await _load_locked(self._order_repository, command.order_id)

        if order.customer_id != current_user.user_id:
            raise AuthorizationError(
                "Only the customer who placed the order can rate it",
                resource_type="order",
                resource_id=order.id,
            )
        if order.status != OrderStatus.DELIVERED:
            raise InvalidStateError(
                "Can only rate delivered orders",
                rule="rating_requires_delivery",
                current_state=order.status.value,
            )
        if order.is_rated:
            raise InvalidStateError("Order has already been rated", rule="rate_once")

        order.rating = command.rating
        order.review = command.review
        order.rated_at = utcnow()
        order = await self._order_repository.update(order)

        restaurant = await self._restaurant_repository.get_for_update(order.restaurant_id)
        if restaurant is not None:
            restaurant.rating = min(5.0, incremental_mean(restaurant.rating, restaurant.total_ratings, command.rating))
            restaurant.total_ratings += 1
            await self._restaurant_repository.update(restaurant)

        if order.delivery_partner_id:
            partner = await self._partner_repository.get_for_update(order.delivery_partner_id)
            if partner is not None:
                partner.rating = min(5.0, incremental_mean(partner.rating, partner.total_ratings, command.rating))
                partner.total_ratings += 1
                await self._partner_repository.update(partner)

        await self._event_bus.publish(
            OrderRated(
                aggregate_id=order.id,
                user_id=current_user.user_id,
                payload={
                    "rating": order.rating,
                    "restaurant_id": order.restaurant_id,
                    "delivery_partner_id": order.delivery_partner_id,
                },
            )
        )
        return order


class AssignPartnerHandler:
    """
    Binds a delivery partner to an order.

    A delivery partner may only assign themselves; the owning restaurant and
    admins name the partner explicitly.
    """

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
        actor_resolver: OrderActorResolver = Depends(),
    ):
        self._order_repository = order_repository
        self._partner_repository = partner_repository
        self._actor_resolver = actor_resolver

    async def handle(self, command: AssignPartnerCommand, current_user: CurrentUser) -> Order:
        order = await _load_locked(self._order_repository, command.order_id)
        actor = await self._actor_resolver.resolve(current_user)

        if actor.role == ROLE_DELIVERY:
            if actor.partner_id is None:
                raise AuthorizationError("Delivery partner profile required")
            if command.delivery_partner_id and command.delivery_partner_id != actor.partner_id:
                raise AuthorizationError("Delivery partners can only assign themselves")
            partner_id = actor.partner_id
        elif actor.role == ROLE_ADMIN or actor.owns_restaurant_of(order):
            if not command.delivery_partner_id:
                raise ValidationError("delivery_partner_id is required", field="delivery_partner_id")
            partner_id = command.delivery_partner_id
        else:
            raise AuthorizationError(
                "Not authorized to assign this order",
                resource_type="order",
                resource_id=order.id,
            )

        if order.status not in ASSIGNABLE_STATUSES:
            raise InvalidStateError(
                "Order is not ready for assignment",
                rule="assignable_status",
                current_state=order.status.value,
            )
        if order.delivery_partner_id is not None:
            raise InvalidStateError("Order already has a delivery partner", rule="single_assignment")

        partner = await self._partner_repository.get_for_update(partner_id)
        if partner is None:
            raise NotFoundError("Delivery partner not found", resource_type="delivery_partner", resource_id=partner_id)
        if partner.status != PartnerStatus.ACTIVE:
            raise InvalidStateError(
                "Delivery partner is not active",
                rule="partner_active",
                current_state=partner.status.value,
            )
        if partner.current_order_id is not None:
            raise InvalidStateError("Delivery partner is already on an order", rule="one_order_per_partner")

        order.delivery_partner_id = partner.id
        order = await self._order_repository.update(order)

        partner.current_order_id = order.id
        await self._partner_repository.update(partner)

        logger.info(f"Order {order.order_number} assigned to delivery partner {partner.id}")
        return order
