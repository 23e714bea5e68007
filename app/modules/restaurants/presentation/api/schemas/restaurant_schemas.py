# 📄 File: app/modules/restaurants/presentation/api/schemas/restaurant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the forms for registering and editing a restaurant and its dishes, and how
# restaurant pages and menus look in API responses.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for restaurant onboarding, profile updates, admin
# moderation and menu management. Money is accepted as Decimal and rendered as numbers.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.restaurants.domain.models.restaurant
#
# 🔄 Connected Modules / Calls From:
# - app.modules.restaurants.presentation.api.v1.restaurants

"""
Restaurant API Schemas

Request Schemas:
- RestaurantCreateRequest / RestaurantUpdateRequest
- RestaurantStatusRequest: Admin moderation
- MenuItemCreateRequest / MenuItemUpdateRequest

Response Schemas:
- MenuItemResponse, RestaurantResponse, RestaurantListResponse
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field

from app.modules.restaurants.domain.models.restaurant import (
    MenuCategory,
    MenuItem,
    OpeningHours,
    Restaurant,
    RestaurantStatus,
)
from app.shared.core.geo import Address, GeoPoint


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ContactRequest(BaseModel):
    phone: str = Field(..., min_length=5, max_length=20)
    email: EmailStr


class RestaurantCreateRequest(BaseModel):
    """Restaurant registration request."""

    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1, max_length=2000)
    cuisine: str = Field(..., min_length=1, max_length=100)
    address: Optional[Address] = None
    location: Optional[GeoPoint] = None
    contact: ContactRequest
    images: List[str] = Field(default_factory=list)
    logo: Optional[str] = None
    opening_hours: Dict[str, OpeningHours] = Field(default_factory=dict)
    minimum_order: Decimal = Field(..., ge=0, description="Smallest accepted subtotal")
    delivery_fee: Decimal = Field(..., ge=0)
    is_open: bool = False


class RestaurantUpdateRequest(BaseModel):
    """Partial restaurant profile update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    cuisine: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[Address] = None
    location: Optional[GeoPoint] = None
    contact: Optional[ContactRequest] = None
    images: Optional[List[str]] = None
    logo: Optional[str] = None
    opening_hours: Optional[Dict[str, OpeningHours]] = None
    minimum_order: Optional[Decimal] = Field(None, ge=0)
    delivery_fee: Optional[Decimal] = Field(None, ge=0)
    is_open: Optional[bool] = None


class RestaurantStatusRequest(BaseModel):
    status: RestaurantStatus


class MenuItemCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1, max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    category: MenuCategory
    image: Optional[str] = None
    is_available: bool = True
    preparation_time: int = Field(..., ge=0, description="Minutes")


class MenuItemUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    category: Optional[MenuCategory] = None
    image: Optional[str] = None
    is_available: Optional[bool] = None
    preparation_time: Optional[int] = Field(None, ge=0)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    image: Optional[str] = None
    is_available: bool
    preparation_time: int

    @classmethod
    def from_domain(cls, item: MenuItem) -> "MenuItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price=float(item.price),
            category=item.category.value,
            image=item.image,
            is_available=item.is_available,
            preparation_time=item.preparation_time,
        )


class RestaurantResponse(BaseModel):
    """Public restaurant view including the menu."""

    id: str
    owner_id: str
    name: str
    description: str
    cuisine: str
    address: Optional[Address] = None
    location: Optional[GeoPoint] = None
    contact: ContactRequest
    images: List[str]
    logo: Optional[str] = None
    opening_hours: Dict[str, OpeningHours]
    menu: List[MenuItemResponse]
    status: str
    is_open: bool
    minimum_order: float
    delivery_fee: float
    commission: float
    rating: float
    total_ratings: int
    total_orders: int
    total_revenue: float
    total_earnings: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, restaurant: Restaurant) -> "RestaurantResponse":
        return cls(
            id=restaurant.id,
            owner_id=restaurant.owner_id,
            name=restaurant.name,
            description=restaurant.description,
            cuisine=restaurant.cuisine,
            address=restaurant.address,
            location=restaurant.location,
            contact=ContactRequest(phone=restaurant.contact.phone, email=restaurant.contact.email),
            images=restaurant.images,
            logo=restaurant.logo,
            opening_hours=restaurant.opening_hours,
            menu=[MenuItemResponse.from_domain(item) for item in restaurant.menu],
            status=restaurant.status.value,
            is_open=restaurant.is_open,
            minimum_order=float(restaurant.minimum_order),
            delivery_fee=float(restaurant.delivery_fee),
            commission=float(restaurant.commission),
            rating=restaurant.rating,
            total_ratings=restaurant.total_ratings,
            total_orders=restaurant.total_orders,
            total_revenue=float(restaurant.total_revenue),
            total_earnings=float(restaurant.total_earnings),
            created_at=restaurant.created_at,
            updated_at=restaurant.updated_at,
        )


class RestaurantListResponse(BaseModel):
    items: List[RestaurantResponse]
    total: int
    page: int
    pages: int
