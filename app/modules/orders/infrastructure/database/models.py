# 📄 File: app/modules/orders/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how orders are stored: one row per order, one row per dish in the order and one
# row per tracking point on the way to the customer.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for orders, order_items and order_tracking. Orders are versioned
# for optimistic concurrency; order items keep the menu item id without a foreign key plus
# a name/price snapshot; tracking rows carry a per-order sequence.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - order_repository_impl.py
# - migrations/versions (schema)

from uuid import uuid4

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import utcnow


class OrderModel(DatabaseBase):
    """
    SQLAlchemy model for orders.
    """
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    order_number = Column(String(32), nullable=False, unique=True)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(String(36), ForeignKey("restaurants.id"), nullable=False, index=True)
    delivery_partner_id = Column(String(36), ForeignKey("delivery_partners.id"), nullable=True, index=True)

    subtotal = Column(Numeric(12, 2), nullable=False)
    delivery_fee = Column(Numeric(12, 2), nullable=False)
    tax = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(20), nullable=False)
    gateway_order_id = Column(String(100), nullable=True, unique=True)
    payment_transaction_id = Column(String(100), nullable=True)
    payment_signature = Column(String(255), nullable=True)
    transfer_id = Column(String(100), nullable=True)
    transfer_account_id = Column(String(100), nullable=True)

    delivery_address = Column(JSON, nullable=False)
    notes = Column(Text, nullable=True)
    estimated_delivery_time = Column(DateTime(timezone=True), nullable=True)
    actual_delivery_time = Column(DateTime(timezone=True), nullable=True)
    delivery_time = Column(Float, nullable=True)
    cancellation_reason = Column(String(500), nullable=True)

    rating = Column(Integer, nullable=True)
    review = Column(Text, nullable=True)
    rated_at = Column(DateTime(timezone=True), nullable=True)

    commission = Column(Numeric(5, 2), nullable=True)
    delivery_partner_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    restaurant_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    platform_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    settled_at = Column(DateTime(timezone=True), nullable=True)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )
    tracking = relationship(
        "OrderTrackingModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderTrackingModel.sequence",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<OrderModel(id={self.id}, order_number={self.order_number}, status={self.status})>"


class OrderItemModel(DatabaseBase):
    """
    SQLAlchemy model for order lines. ``menu_item_id`` is deliberately not a
    foreign key: removing a menu item must not affect placed orders.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    menu_item_id = Column(String(36), nullable=False)
    name = Column(String(150), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    special_instructions = Column(String(500), nullable=True)

    order = relationship("OrderModel", back_populates="items")


class OrderTrackingModel(DatabaseBase):
    """
    SQLAlchemy model for tracking log entries. Rows are only ever inserted.
    """
    __tablename__ = "order_tracking"
    __table_args__ = (UniqueConstraint("order_id", "sequence"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False)
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    order = relationship("OrderModel", back_populates="tracking")
