# 📄 File: app/modules/orders/domain/models/order.py
# 🧭 Purpose (Layman Explanation):
# Describes a food order: who ordered what from which restaurant, how much it costs,
# where it is going, who is delivering it, how it is progressing and how it was rated.
# 🧪 Purpose (Technical Summary):
# Order aggregate root with snapshotted line items, an append-only tracking log, payment
# reconciliation details and the settled earnings split. Status changes go through the
# lifecycle service; this model only holds state.
# 🔗 Dependencies:
# pydantic, decimal, app.shared.core.geo, app.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# order command/query handlers, order repository, payment service, order schemas

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.geo import Address, GeoPoint
from app.shared.utils.helpers import generate_id, utcnow


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked-up"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"


class OrderItem(BaseModel):
    """
    A line of an order. Name and price are copied from the menu when the order
    is placed and never re-read afterwards.
    """

    menu_item_id: str
    name: str
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)
    special_instructions: Optional[str] = Field(None, max_length=500)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class TrackingEntry(BaseModel):
    """One entry of the append-only tracking log."""

    sequence: int = Field(..., ge=1)
    status: OrderStatus
    location: GeoPoint
    timestamp: datetime = Field(default_factory=utcnow)


class PaymentDetails(BaseModel):
    gateway_order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    signature: Optional[str] = None
    transfer_id: Optional[str] = None
    transfer_account_id: Optional[str] = None


class Order(BaseModel):
    """
    Order aggregate root.

    Invariants:
    - ``total == subtotal + delivery_fee + tax``
    - ``order_number`` is assigned once and never regenerated
    - ``items`` never change after creation
    - ``tracking`` is only ever appended to
    - once settled, the three earnings shares sum to ``total``
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    order_number: str
    customer_id: str
    restaurant_id: str
    delivery_partner_id: Optional[str] = None

    items: List[OrderItem] = Field(..., min_length=1)
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal

    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod
    payment_details: PaymentDetails = Field(default_factory=PaymentDetails)

    delivery_address: Address
    notes: Optional[str] = Field(None, max_length=500)
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    delivery_time: Optional[float] = Field(None, description="Minutes from placement to delivery")
    cancellation_reason: Optional[str] = None

    rating: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = None
    rated_at: Optional[datetime] = None

    commission: Optional[Decimal] = None
    delivery_partner_earnings: Decimal = Decimal("0.00")
    restaurant_earnings: Decimal = Decimal("0.00")
    platform_earnings: Decimal = Decimal("0.00")
    settled_at: Optional[datetime] = None

    tracking: List[TrackingEntry] = Field(default_factory=list)

    version: int = 1
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_settled(self) -> bool:
        return self.settled_at is not None

    @property
    def is_rated(self) -> bool:
        return self.rating is not None
