# 📄 File: app/modules/orders/domain/services/pricing.py
# 🧭 Purpose (Layman Explanation):
# Works out what an order costs: checks every dish is on the menu and available, adds up
# the food, applies tax and the delivery fee, and refuses orders below the restaurant's minimum.
# 🧪 Purpose (Technical Summary):
# Pure pricing functions over the live menu. Prices are snapshotted into OrderItem lines;
# totals use Decimal with tax rounded half-up to cents.
# 🔗 Dependencies:
# decimal, restaurant and order domain models, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# CreateOrderHandler, unit tests

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from app.modules.restaurants.domain.models.restaurant import Restaurant
from app.shared.core.exceptions import InvalidStateError, NotFoundError
from app.shared.utils.helpers import Number, round_money, to_decimal

from ..models.order import OrderItem


@dataclass(frozen=True)
class RequestedItem:
    menu_item_id: str
    quantity: int
    special_instructions: Optional[str] = None


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal


def compute_order_totals(
    lines: Iterable[Tuple[Number, int]],
    delivery_fee: Number,
    tax_rate: Number = Decimal("0.10"),
) -> OrderTotals:
    """
    Compute order totals from ``(unit_price, quantity)`` lines.

    ``tax = round(subtotal * tax_rate, 2)`` and
    ``total = subtotal + delivery_fee + tax``.
    """
    subtotal = round_money(sum((to_decimal(price) * quantity for price, quantity in lines), Decimal("0")))
    fee = round_money(delivery_fee)
    tax = round_money(subtotal * to_decimal(tax_rate))
    return OrderTotals(subtotal=subtotal, delivery_fee=fee, tax=tax, total=subtotal + fee + tax)


def price_order(
    restaurant: Restaurant,
    requested: Sequence[RequestedItem],
    tax_rate: Number = Decimal("0.10"),
) -> Tuple[List[OrderItem], OrderTotals]:
    """
    Validate requested items against the restaurant's current menu and price them.

    Raises:
        NotFoundError: If a menu item is not on the menu
        InvalidStateError: If a menu item is unavailable or the subtotal is
            below the restaurant's minimum order
    """
    items: List[OrderItem] = []
    for request in requested:
        menu_item = restaurant.find_menu_item(request.menu_item_id)
        if menu_item is None:
            raise NotFoundError(
                f"Menu item {request.menu_item_id} not found",
                resource_type="menu_item",
                resource_id=request.menu_item_id,
            )
        if not menu_item.is_available:
            raise InvalidStateError(
                f"Menu item {menu_item.name} is not available",
                rule="menu_item_available",
            )
        items.append(
            OrderItem(
                menu_item_id=menu_item.id,
                name=menu_item.name,
                quantity=request.quantity,
                price=menu_item.price,
                special_instructions=request.special_instructions,
            )
        )

    totals = compute_order_totals(
        ((item.price, item.quantity) for item in items),
        delivery_fee=restaurant.delivery_fee,
        tax_rate=tax_rate,
    )

    if totals.subtotal < restaurant.minimum_order:
        raise InvalidStateError(
            "Order amount below minimum",
            rule="minimum_order",
            details={"minimum_order": float(restaurant.minimum_order), "subtotal": float(totals.subtotal)},
        )

    return items, totals
