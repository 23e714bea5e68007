# 📄 File: app/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the shape of sign-up and log-in forms and what the app sends back after
# a successful login.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the authentication endpoints with password,
# phone and role validation and a public user view that never exposes the password hash.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.user_management.domain.models.user
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.auth

"""
Authentication API Schemas

Request Schemas:
- RegisterRequest: Account creation data
- LoginRequest: User credentials

Response Schemas:
- UserResponse: Public user view
- LoginResponse: Bearer token plus user
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.modules.user_management.domain.models.user import User, UserRole
from app.shared.core.geo import Address
from app.shared.utils.validators import validate_phone


class RegisterRequest(BaseModel):
    """User registration request schema."""

    name: str = Field(..., min_length=1, max_length=100, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, max_length=72, description="Password (8-72 characters)")
    phone: Optional[str] = Field(None, description="Contact phone number")
    role: UserRole = Field(default=UserRole.CUSTOMER, description="customer, restaurant or delivery")
    address: Optional[Address] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not any(c.isalpha() for c in v) or not any(c.isdigit() for c in v):
            raise ValueError("Password must contain letters and digits")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v) if v else v


class LoginRequest(BaseModel):
    """User login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    status: str
    address: Optional[Address] = None
    avatar: Optional[str] = None
    total_orders: int
    total_spent: float
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role.value,
            status=user.status.value,
            address=user.address,
            avatar=user.avatar,
            total_orders=user.total_orders,
            total_spent=float(user.total_spent),
            created_at=user.created_at,
        )


class LoginResponse(BaseModel):
    """Successful authentication response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
