# 📄 File: app/modules/orders/domain/services/transition_service.py
# 🧭 Purpose (Layman Explanation):
# Moves an order to its next step and takes care of everything that comes with it: paying
# out the rider and the restaurant on delivery, undoing restaurant revenue on cancellation,
# freeing the rider, and telling everyone watching the order.
# 🧪 Purpose (Technical Summary):
# Applies a legal status transition to a locked order together with its side effects
# (settlement, revenue reversal, partner release) and publishes OrderStatusChanged and
# OrderSettled events. Authorization is the caller's responsibility.
# 🔗 Dependencies:
# order/restaurant/partner repositories, lifecycle and settlement services, EventBus, settings
# 🔄 Connected Modules / Calls From:
# UpdateOrderStatusHandler, PaymentService (payment confirmation, failure, refund)

import logging
from decimal import Decimal
from typing import Optional

from fastapi import Depends

from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.shared.config.settings import get_settings
from app.shared.core.event_bus import EventBus, get_event_bus
from app.shared.core.exceptions import InvalidStateError, NotFoundError
from app.shared.utils.helpers import utcnow

from ..events.order_events import OrderSettled, OrderStatusChanged
from ..models.order import Order, OrderStatus
from ..repositories.order_repository import OrderRepository
from .lifecycle import REQUIRES_PARTNER, delivery_minutes, ensure_transition
from .settlement import compute_earnings_split, incremental_mean

logger = logging.getLogger(__name__)


class OrderTransitionService:
    """
    Applies status transitions and their effects.

    Effects:
    - ``delivered``: stamps delivery time, settles earnings, credits the
      restaurant and partner ledgers and frees the partner
    - ``cancelled``/``rejected``: stores the reason, reverses the revenue
      recorded at placement and frees the partner
    """

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        restaurant_repository: RestaurantRepository = Depends(),
        partner_repository: DeliveryPartnerRepository = Depends(),
        event_bus: EventBus = Depends(get_event_bus),
    ):
        self.order_repository = order_repository
        self.restaurant_repository = restaurant_repository
        self.partner_repository = partner_repository
        self.event_bus = event_bus
        self.settings = get_settings()

    async def transition(
        self,
        order: Order,
        target: OrderStatus,
        actor_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Order:
        """
        Move a locked order to ``target``.

        Raises:
            InvalidStateError: If the transition is illegal or needs an
                assigned delivery partner that is missing
        """
        ensure_transition(order.status, target)
        if target in REQUIRES_PARTNER and order.delivery_partner_id is None:
            raise InvalidStateError(
                "A delivery partner must be assigned first",
                rule="partner_required",
                current_state=order.status.value,
            )

        previous = order.status
        if target == OrderStatus.DELIVERED:
            await self._settle(order)
        elif target in (OrderStatus.CANCELLED, OrderStatus.REJECTED):
            await self._unwind(order, reason)

        order.status = target
        order = await self.order_repository.update(order)
        logger.info(f"Order {order.order_number} {previous.value} -> {target.value}")

        await self.event_bus.publish(OrderStatusChanged.create(order, previous.value, user_id=actor_id))
        if target == OrderStatus.DELIVERED:
            await self.event_bus.publish(
                OrderSettled(
                    aggregate_id=order.id,
                    user_id=actor_id,
                    payload={
                        "order_number": order.order_number,
                        "total": str(order.total),
                        "delivery_partner_earnings": str(order.delivery_partner_earnings),
                        "restaurant_earnings": str(order.restaurant_earnings),
                        "platform_earnings": str(order.platform_earnings),
                        "delivery_time": order.delivery_time,
                    },
                )
            )
        return order

    async def _settle(self, order: Order) -> None:
        now = utcnow()
        order.actual_delivery_time = now
        order.delivery_time = delivery_minutes(order.created_at, now)

        restaurant = await self.restaurant_repository.get_for_update(order.restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found", resource_type="restaurant", resource_id=order.restaurant_id)

        split = compute_earnings_split(
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            total=order.total,
            commission=restaurant.commission,
            partner_share=self.settings.DELIVERY_PARTNER_SHARE,
        )
        order.commission = restaurant.commission
        order.delivery_partner_earnings = split.delivery_partner
        order.restaurant_earnings = split.restaurant
        order.platform_earnings = split.platform
        order.settled_at = now

        restaurant.total_earnings = restaurant.total_earnings + split.restaurant
        await self.restaurant_repository.update(restaurant)

        partner = await self.partner_repository.get_for_update(order.delivery_partner_id)
        if partner is not None:
            partner.average_delivery_time = incremental_mean(
                partner.average_delivery_time,
                partner.total_deliveries,
                order.delivery_time,
            )
            partner.total_deliveries += 1
            partner.total_earnings = partner.total_earnings + split.delivery_partner
            if partner.current_order_id == order.id:
                partner.current_order_id = None
            await self.partner_repository.update(partner)

    async def _unwind(self, order: Order, reason: Optional[str]) -> None:
        order.cancellation_reason = reason

        restaurant = await self.restaurant_repository.get_for_update(order.restaurant_id)
        if restaurant is not None:
            restaurant.total_revenue = max(Decimal("0.00"), restaurant.total_revenue - order.total)
            await self.restaurant_repository.update(restaurant)

        if order.delivery_partner_id:
            partner = await self.partner_repository.get_for_update(order.delivery_partner_id)
            if partner is not None and partner.current_order_id == order.id:
                partner.current_order_id = None
                await self.partner_repository.update(partner)
