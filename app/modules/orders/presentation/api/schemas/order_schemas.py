# 📄 File: app/modules/orders/presentation/api/schemas/order_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines what a customer sends to place an order, what restaurants and riders send to
# move it along, and how an order looks when the app shows it.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the orders API. Requests carry only caller input
# (no prices, totals, statuses or order numbers); responses render money as floats and
# include items, tracking, payment and settlement details.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.orders.domain.models.order
# - app.shared.core.geo, app.shared.utils.validators
#
# 🔄 Connected Modules / Calls From:
# - app.modules.orders.presentation.api.v1.orders

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.modules.orders.application.commands import OrderLineInput
from app.modules.orders.domain.models.order import Order, OrderStatus, PaymentMethod
from app.shared.core.geo import Address, GeoPoint
from app.shared.utils.validators import validate_coordinates


class OrderCreateRequest(BaseModel):
    """Order placement request."""

    restaurant_id: str = Field(..., min_length=1)
    items: List[OrderLineInput] = Field(..., min_length=1)
    delivery_address: Address
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = Field(None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "example": {
                "restaurant_id": "5f0c2d1e-6a0b-4f5e-9a43-1d2c3b4a5e6f",
                "items": [{"menu_item_id": "a1b2c3d4-0000-4000-8000-000000000001", "quantity": 2}],
                "delivery_address": {
                    "street": "12 MG Road",
                    "city": "Bengaluru",
                    "zip_code": "560001",
                    "coordinates": {"type": "Point", "coordinates": [77.5946, 12.9716]},
                },
                "payment_method": "card",
            }
        }
    }


class OrderStatusRequest(BaseModel):
    status: OrderStatus
    reason: Optional[str] = Field(None, max_length=500, description="Stored for cancellations and rejections")


class TrackingRequest(BaseModel):
    """A tracking ping; coordinates are ``[longitude, latitude]``."""

    status: OrderStatus
    coordinates: List[float]

    @field_validator("coordinates", mode="before")
    @classmethod
    def check_coordinates(cls, v):
        return validate_coordinates(v)

    def to_point(self) -> GeoPoint:
        return GeoPoint(coordinates=self.coordinates)


class RatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = Field(None, max_length=1000)


class AssignRequest(BaseModel):
    delivery_partner_id: Optional[str] = Field(
        None,
        description="Partner to assign; omitted when a delivery partner accepts the order",
    )


class OrderItemResponse(BaseModel):
    menu_item_id: str
    name: str
    quantity: int
    price: float
    line_total: float
    special_instructions: Optional[str] = None


class TrackingEntryResponse(BaseModel):
    sequence: int
    status: str
    location: GeoPoint
    timestamp: datetime


class EarningsResponse(BaseModel):
    commission: Optional[float] = None
    delivery_partner: float
    restaurant: float
    platform: float
    settled_at: Optional[datetime] = None


class OrderResponse(BaseModel):
    id: str
    order_number: str
    customer_id: str
    restaurant_id: str
    delivery_partner_id: Optional[str] = None
    items: List[OrderItemResponse]
    subtotal: float
    delivery_fee: float
    tax: float
    total: float
    status: str
    payment_status: str
    payment_method: str
    payment_gateway_order_id: Optional[str] = None
    delivery_address: Address
    notes: Optional[str] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    delivery_time: Optional[float] = None
    cancellation_reason: Optional[str] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    earnings: EarningsResponse
    tracking: List[TrackingEntryResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            order_number=order.order_number,
            customer_id=order.customer_id,
            restaurant_id=order.restaurant_id,
            delivery_partner_id=order.delivery_partner_id,
            items=[
                OrderItemResponse(
                    menu_item_id=item.menu_item_id,
                    name=item.name,
                    quantity=item.quantity,
                    price=float(item.price),
                    line_total=float(item.line_total),
                    special_instructions=item.special_instructions,
                )
                for item in order.items
            ],
            subtotal=float(order.subtotal),
            delivery_fee=float(order.delivery_fee),
            tax=float(order.tax),
            total=float(order.total),
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method.value,
            payment_gateway_order_id=order.payment_details.gateway_order_id,
            delivery_address=order.delivery_address,
            notes=order.notes,
            estimated_delivery_time=order.estimated_delivery_time,
            actual_delivery_time=order.actual_delivery_time,
            delivery_time=order.delivery_time,
            cancellation_reason=order.cancellation_reason,
            rating=order.rating,
            review=order.review,
            earnings=EarningsResponse(
                commission=float(order.commission) if order.commission is not None else None,
                delivery_partner=float(order.delivery_partner_earnings),
                restaurant=float(order.restaurant_earnings),
                platform=float(order.platform_earnings),
                settled_at=order.settled_at,
            ),
            tracking=[
                TrackingEntryResponse(
                    sequence=entry.sequence,
                    status=entry.status.value,
                    location=entry.location,
                    timestamp=entry.timestamp,
                )
                for entry in order.tracking
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    pages: int
