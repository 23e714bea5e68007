# 📄 File: app/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the marketplace: a customer, a restaurant owner, a delivery rider
# or an admin, with their login details, contact information and account status.
# 🧪 Purpose (Technical Summary):
# Domain model for the User entity with role and status enumerations, email normalization
# and customer spend aggregates. Accounts are never hard-deleted; status flags are used instead.
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid, app.shared.core.geo
# 🔄 Connected Modules / Calls From:
# auth_service.py, user_repository.py, authentication middleware, order creation (customer stats)

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.shared.core.geo import Address


class UserRole(str, Enum):
    """Marketplace roles."""
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"
    DELIVERY = "delivery"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Account status; used instead of deleting users."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class User(BaseModel):
    """
    User domain model.

    Holds identity, hashed credentials, role and profile data. Customers
    additionally accumulate ``total_orders`` and ``total_spent``.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password_hash: str
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    status: UserStatus = UserStatus.ACTIVE
    address: Optional[Address] = None
    avatar: Optional[str] = None

    total_orders: int = 0
    total_spent: Decimal = Decimal("0.00")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are stored lower-case so uniqueness is case-insensitive."""
        return v.lower().strip()

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
