"""Tracking handler behaviour against in-memory repositories."""

from decimal import Decimal

import pytest

from app.modules.delivery_partners.domain.models.delivery_partner import DeliveryPartner, PartnerStatus
from app.modules.orders.application.commands import AddTrackingCommand
from app.modules.orders.application.handlers.command_handlers import AddTrackingHandler
from app.modules.orders.domain.models.order import Order, OrderStatus
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import NotFoundError
from app.shared.core.geo import GeoPoint
from tests.conftest import DELIVERY_ADDRESS


class OrderStore:
    def __init__(self, order):
        self.order = order
        self.appended = []

    async def get_for_update(self, order_id):
        return self.order if order_id == self.order.id else None

    async def append_tracking(self, order_id, entry):
        self.appended.append(entry)
        return entry


class PartnerStore:
    """Finds the partner by user but loses the row before it is locked."""

    def __init__(self, partner):
        self.partner = partner

    async def get_by_user(self, user_id):
        return self.partner if user_id == self.partner.user_id else None

    async def get_for_update(self, partner_id):
        return None


class SilentBus:
    async def publish(self, event):
        pass


@pytest.fixture
def partner():
    return DeliveryPartner(
        user_id="rider-1",
        vehicle={"type": "scooter", "number": "KA05XY9876"},
        status=PartnerStatus.ACTIVE,
    )


@pytest.fixture
def order(partner):
    return Order(
        order_number="ORD261019-0123456789ab",
        customer_id="customer-1",
        restaurant_id="restaurant-1",
        delivery_partner_id=partner.id,
        items=[{"menu_item_id": "item-1", "name": "Paneer Tikka", "quantity": 1, "price": Decimal("150.00")}],
        subtotal=Decimal("150.00"),
        delivery_fee=Decimal("30.00"),
        tax=Decimal("15.00"),
        total=Decimal("195.00"),
        status=OrderStatus.PICKED_UP,
        payment_method="cash",
        delivery_address=DELIVERY_ADDRESS,
    )


async def test_vanished_partner_is_not_found(order, partner):
    orders = OrderStore(order)
    handler = AddTrackingHandler(
        order_repository=orders,
        partner_repository=PartnerStore(partner),
        event_bus=SilentBus(),
    )
    command = AddTrackingCommand(
        order_id=order.id,
        status=OrderStatus.DELIVERING,
        location=GeoPoint(coordinates=[77.6, 12.9]),
    )

    with pytest.raises(NotFoundError):
        await handler.handle(command, CurrentUser(user_id="rider-1", email="rider@example.com", role="delivery"))

    assert orders.appended == []
