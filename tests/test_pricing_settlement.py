"""Order pricing, earnings split and running averages."""

from decimal import Decimal

import pytest

from app.modules.orders.domain.services.pricing import RequestedItem, compute_order_totals, price_order
from app.modules.orders.domain.services.settlement import compute_earnings_split, incremental_mean
from app.modules.restaurants.domain.models.restaurant import ContactInfo, MenuCategory, MenuItem, Restaurant
from app.shared.core.exceptions import InvalidStateError, NotFoundError


def make_restaurant(**overrides) -> Restaurant:
    data = dict(
        owner_id="owner-1",
        name="Spice Route",
        description="North Indian kitchen",
        cuisine="Indian",
        contact=ContactInfo(phone="+919876543210", email="kitchen@example.com"),
        minimum_order=Decimal("100"),
        delivery_fee=Decimal("20"),
        menu=[
            MenuItem(
                id="item-1",
                name="Paneer Tikka",
                description="Grilled cottage cheese",
                price=Decimal("150.00"),
                category=MenuCategory.MAIN_COURSE,
                preparation_time=15,
            ),
            MenuItem(
                id="item-2",
                name="Lassi",
                description="Sweet yogurt drink",
                price=Decimal("50.00"),
                category=MenuCategory.BEVERAGES,
                preparation_time=5,
                is_available=False,
            ),
        ],
    )
    data.update(overrides)
    return Restaurant(**data)


class TestOrderTotals:
    def test_totals_include_fee_and_tax(self):
        totals = compute_order_totals([(Decimal("150"), 2)], delivery_fee=Decimal("20"), tax_rate=Decimal("0.10"))

        assert totals.subtotal == Decimal("300.00")
        assert totals.tax == Decimal("30.00")
        assert totals.delivery_fee == Decimal("20.00")
        assert totals.total == Decimal("350.00")

    def test_tax_rounds_half_up_to_cents(self):
        totals = compute_order_totals([(Decimal("0.25"), 1)], delivery_fee=0, tax_rate=Decimal("0.10"))

        assert totals.tax == Decimal("0.03")
        assert totals.total == totals.subtotal + totals.delivery_fee + totals.tax

    def test_float_prices_do_not_leak_binary_error(self):
        totals = compute_order_totals([(0.1, 3)], delivery_fee=0.2, tax_rate=0)

        assert totals.subtotal == Decimal("0.30")
        assert totals.total == Decimal("0.50")


class TestPriceOrder:
    def test_snapshots_menu_name_and_price(self):
        items, totals = price_order(make_restaurant(), [RequestedItem(menu_item_id="item-1", quantity=2)])

        assert len(items) == 1
        assert items[0].name == "Paneer Tikka"
        assert items[0].price == Decimal("150.00")
        assert totals.total == Decimal("350.00")

    def test_below_minimum_is_rejected(self):
        restaurant = make_restaurant(minimum_order=Decimal("200"))

        with pytest.raises(InvalidStateError) as exc_info:
            price_order(restaurant, [RequestedItem(menu_item_id="item-1", quantity=1)])

        assert exc_info.value.message == "Order amount below minimum"

    def test_unknown_menu_item(self):
        with pytest.raises(NotFoundError):
            price_order(make_restaurant(), [RequestedItem(menu_item_id="missing", quantity=1)])

    def test_unavailable_menu_item(self):
        with pytest.raises(InvalidStateError):
            price_order(make_restaurant(minimum_order=Decimal("0")), [RequestedItem(menu_item_id="item-2", quantity=1)])


class TestEarningsSplit:
    def test_reference_split(self):
        split = compute_earnings_split(
            subtotal=Decimal("300"),
            delivery_fee=Decimal("20"),
            total=Decimal("350"),
            commission=Decimal("10"),
            partner_share=Decimal("0.80"),
        )

        assert split.delivery_partner == Decimal("16.00")
        assert split.restaurant == Decimal("270.00")
        assert split.platform == Decimal("64.00")
        assert split.total == Decimal("350.00")

    def test_platform_absorbs_rounding(self):
        split = compute_earnings_split(
            subtotal=Decimal("33.33"),
            delivery_fee=Decimal("10.01"),
            total=Decimal("46.67"),
            commission=Decimal("12.5"),
        )

        assert split.total == Decimal("46.67")

    def test_zero_commission_pays_restaurant_in_full(self):
        split = compute_earnings_split(
            subtotal=Decimal("100"),
            delivery_fee=Decimal("0"),
            total=Decimal("110"),
            commission=Decimal("0"),
        )

        assert split.restaurant == Decimal("100.00")
        assert split.delivery_partner == Decimal("0.00")
        assert split.platform == Decimal("10.00")


class TestIncrementalMean:
    def test_first_value(self):
        assert incremental_mean(0.0, 0, 4) == 4.0

    def test_second_value(self):
        assert incremental_mean(4.0, 1, 5) == 4.5

    def test_negative_count(self):
        with pytest.raises(ValueError):
            incremental_mean(1.0, -1, 3)
