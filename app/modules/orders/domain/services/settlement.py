# 📄 File: app/modules/orders/domain/services/settlement.py
# 🧭 Purpose (Layman Explanation):
# Splits the money from a delivered order between the rider, the restaurant and the
# platform, and keeps running averages like star ratings up to date.
# 🧪 Purpose (Technical Summary):
# Pure settlement functions: the earnings split in Decimal (partner and restaurant shares
# rounded half-up to cents, the platform takes the remainder so the shares always sum to
# the total) and the incremental mean used for ratings and delivery times.
# 🔗 Dependencies:
# decimal, app.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# UpdateOrderStatusHandler (delivery), RateOrderHandler, unit tests

from dataclasses import dataclass
from decimal import Decimal

from app.shared.utils.helpers import Number, round_money, to_decimal

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class EarningsSplit:
    delivery_partner: Decimal
    restaurant: Decimal
    platform: Decimal

    @property
    def total(self) -> Decimal:
        return self.delivery_partner + self.restaurant + self.platform


def compute_earnings_split(
    subtotal: Number,
    delivery_fee: Number,
    total: Number,
    commission: Number = Decimal("10"),
    partner_share: Number = Decimal("0.80"),
) -> EarningsSplit:
    """
    Split an order's total between delivery partner, restaurant and platform.

    - delivery partner: ``delivery_fee * partner_share``
    - restaurant: ``subtotal * (1 - commission / 100)``
    - platform: ``total`` minus both, absorbing rounding

    Example:
        fee 20, subtotal 300, commission 10, total 350 -> 16.00 / 270.00 / 64.00
    """
    partner = round_money(to_decimal(delivery_fee) * to_decimal(partner_share))
    restaurant = round_money(to_decimal(subtotal) * (1 - to_decimal(commission) / HUNDRED))
    platform = round_money(total) - partner - restaurant
    return EarningsSplit(delivery_partner=partner, restaurant=restaurant, platform=platform)


def incremental_mean(current_mean: float, current_count: int, value: float) -> float:
    """Running average after adding ``value``: ``(mean * count + value) / (count + 1)``."""
    if current_count < 0:
        raise ValueError("count cannot be negative")
    return (current_mean * current_count + value) / (current_count + 1)
