# 📄 File: app/modules/restaurants/domain/models/restaurant.py
# 🧭 Purpose (Layman Explanation):
# Describes a restaurant on the marketplace: who owns it, where it is, what it sells,
# how much delivery costs, the smallest order it accepts and how well it is doing.
# 🧪 Purpose (Technical Summary):
# Restaurant aggregate root with its embedded menu items. Menu items carry stable UUIDs
# assigned at creation and never reused; money is Decimal; rating and revenue aggregates
# are maintained by the order lifecycle.
# 🔗 Dependencies:
# pydantic, decimal, app.shared.core.geo, app.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# restaurant_service.py, restaurant_repository.py, order command handlers (pricing, settlement, rating)

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.shared.core.geo import Address, GeoPoint
from app.shared.utils.helpers import generate_id, utcnow

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class RestaurantStatus(str, Enum):
    """Moderation status set by admins."""
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class MenuCategory(str, Enum):
    APPETIZERS = "appetizers"
    MAIN_COURSE = "main-course"
    DESSERTS = "desserts"
    BEVERAGES = "beverages"
    OTHER = "other"


class ContactInfo(BaseModel):
    phone: str = Field(..., min_length=5, max_length=20)
    email: EmailStr


class OpeningHours(BaseModel):
    """Opening window for one weekday, ``HH:MM`` 24h strings."""

    open: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    close: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class MenuItem(BaseModel):
    """
    A dish on a restaurant's menu.

    Orders reference items by ``id`` and snapshot name and price, so an item
    may be edited or removed without affecting placed orders.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1, max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    category: MenuCategory
    image: Optional[str] = None
    is_available: bool = True
    preparation_time: int = Field(..., ge=0, description="Minutes")


class Restaurant(BaseModel):
    """
    Restaurant aggregate root.

    Invariants:
    - ``minimum_order`` and ``delivery_fee`` are non-negative
    - ``rating`` stays within [0, 5]
    - ``commission`` is a percentage within [0, 100]
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    owner_id: str
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1, max_length=2000)
    cuisine: str = Field(..., min_length=1, max_length=100)
    address: Optional[Address] = None
    location: Optional[GeoPoint] = None
    contact: ContactInfo
    images: List[str] = Field(default_factory=list)
    logo: Optional[str] = None
    opening_hours: Dict[str, OpeningHours] = Field(default_factory=dict)
    menu: List[MenuItem] = Field(default_factory=list)

    status: RestaurantStatus = RestaurantStatus.PENDING
    is_open: bool = False
    minimum_order: Decimal = Field(..., ge=0)
    delivery_fee: Decimal = Field(..., ge=0)
    commission: Decimal = Field(default=Decimal("10"), ge=0, le=100)

    rating: float = Field(default=0.0, ge=0, le=5)
    total_ratings: int = Field(default=0, ge=0)
    total_orders: int = Field(default=0, ge=0)
    total_revenue: Decimal = Decimal("0.00")
    total_earnings: Decimal = Decimal("0.00")
    average_preparation_time: float = 0.0

    version: int = 1
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("opening_hours")
    @classmethod
    def check_weekdays(cls, v: Dict[str, OpeningHours]) -> Dict[str, OpeningHours]:
        unknown = set(v) - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
        return v

    @property
    def is_accepting_orders(self) -> bool:
        return self.status == RestaurantStatus.ACTIVE and self.is_open

    def find_menu_item(self, item_id: str) -> Optional[MenuItem]:
        for item in self.menu:
            if item.id == item_id:
                return item
        return None
