"""
Common FastAPI dependencies for the food delivery marketplace.
Provides the authenticated caller and authorization guards.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Query, Request

from .exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

ROLE_CUSTOMER = "customer"
ROLE_RESTAURANT = "restaurant"
ROLE_DELIVERY = "delivery"
ROLE_ADMIN = "admin"


class CurrentUser:
    """Authenticated caller, with the role looked up server-side."""

    def __init__(
        self,
        user_id: str,
        email: str,
        role: str,
        is_active: bool = True,
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.is_active = is_active
        self.token_payload = token_payload or {}

    def has_role(self, *roles: str) -> bool:
        """Check if user has any of the given roles."""
        return self.role in roles

    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
        }


async def get_current_user(request: Request) -> CurrentUser:
    """
    Get current authenticated user from request state.
    This dependency assumes AuthenticationMiddleware has already validated the token.

    Raises:
        AuthenticationError: If no valid bearer token accompanied the request
        AuthorizationError: If the account is not active
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise AuthenticationError("Not authenticated")

    current_user = CurrentUser(
        user_id=user_id,
        email=getattr(request.state, "user_email", ""),
        role=getattr(request.state, "user_role", ROLE_CUSTOMER),
        is_active=getattr(request.state, "is_active", True),
        token_payload=getattr(request.state, "token_payload", None),
    )

    if not current_user.is_active:
        logger.warning(f"Inactive user attempted access: {user_id}")
        raise AuthorizationError("Account is not active")

    return current_user


async def get_optional_current_user(request: Request) -> Optional[CurrentUser]:
    """Current user for endpoints that also serve anonymous callers."""
    if not getattr(request.state, "user_id", None):
        return None
    return await get_current_user(request)


async def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """Require the caller to be an admin."""
    if not current_user.is_admin():
        raise AuthorizationError("Admin privileges required", required_role=ROLE_ADMIN)
    return current_user


def require_role(*roles: str):
    """
    Dependency factory requiring the caller to hold one of ``roles``.

    Usage:
        current_user: CurrentUser = Depends(require_role("restaurant", "admin"))
    """

    async def role_dependency(
        current_user: CurrentUser = Depends(get_current_user)
    ) -> CurrentUser:
        if not current_user.has_role(*roles):
            raise AuthorizationError(
                f"This action requires role: {', '.join(roles)}",
                required_role=",".join(roles),
            )
        return current_user

    return role_dependency


class PaginationParams:
    """Page-based pagination parameters."""

    def __init__(self, page: int = 1, limit: int = 10):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)
