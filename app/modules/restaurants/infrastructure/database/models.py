# 📄 File: app/modules/restaurants/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how restaurants and their menus are stored in the database: one row per
# restaurant and one row per dish.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the restaurants and menu_items tables. Restaurants are
# versioned (optimistic concurrency) and own their menu items (cascade delete-orphan);
# owner_id is unique to enforce one restaurant per user.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - restaurant_repository_impl.py
# - migrations/versions (schema)

from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import utcnow


class RestaurantModel(DatabaseBase):
    """
    SQLAlchemy model for restaurants.
    """
    __tablename__ = "restaurants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=False)
    cuisine = Column(String(100), nullable=False, index=True)
    address = Column(JSON, nullable=True)
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    contact_phone = Column(String(20), nullable=False)
    contact_email = Column(String(255), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    logo = Column(String(500), nullable=True)
    opening_hours = Column(JSON, nullable=False, default=dict)

    status = Column(String(20), nullable=False, default="pending", index=True)
    is_open = Column(Boolean, nullable=False, default=False)
    minimum_order = Column(Numeric(12, 2), nullable=False)
    delivery_fee = Column(Numeric(12, 2), nullable=False)
    commission = Column(Numeric(5, 2), nullable=False, default=10)

    rating = Column(Float, nullable=False, default=0.0)
    total_ratings = Column(Integer, nullable=False, default=0)
    total_orders = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    total_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    average_preparation_time = Column(Float, nullable=False, default=0.0)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    menu_items = relationship(
        "MenuItemModel",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="MenuItemModel.position",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<RestaurantModel(id={self.id}, name={self.name}, status={self.status})>"


class MenuItemModel(DatabaseBase):
    """
    SQLAlchemy model for menu items, owned by a restaurant.
    """
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    restaurant_id = Column(
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(20), nullable=False)
    image = Column(String(500), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    preparation_time = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    restaurant = relationship("RestaurantModel", back_populates="menu_items")

    def __repr__(self) -> str:
        return f"<MenuItemModel(id={self.id}, name={self.name}, price={self.price})>"
