# 📄 File: app/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing up and logging in: checks that the email is new, stores the password safely,
# and hands back a login token when the password is right.
# 🧪 Purpose (Technical Summary):
# Domain service for registration and credential authentication; hashes passwords with
# bcrypt, rejects duplicate emails and self-registration as admin, issues JWT access tokens.
# 🔗 Dependencies:
# Domain models, repositories, app.shared.core.security
# 🔄 Connected Modules / Calls From:
# API auth endpoints (app.modules.user_management.presentation.api.v1.auth)

import logging
from typing import Optional, Tuple

from fastapi import Depends

from app.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
)
from app.shared.core.geo import Address
from app.shared.core.security import create_access_token, get_password_hash, verify_password
from app.shared.utils.helpers import utcnow

from ..models.user import User, UserRole, UserStatus
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SELF_REGISTRATION_ROLES = {UserRole.CUSTOMER, UserRole.RESTAURANT, UserRole.DELIVERY}


class AuthService:
    """
    Domain service for authentication business logic.

    Business rules:
    - Emails are unique (case-insensitive)
    - Admin accounts cannot be self-registered
    - Suspended or inactive accounts cannot log in
    """

    def __init__(self, user_repository: UserRepository = Depends()):
        self.user_repository = user_repository

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.CUSTOMER,
        phone: Optional[str] = None,
        address: Optional[Address] = None,
    ) -> User:
        """
        Register a new user account.

        Raises:
            DuplicateResourceError: If the email is already registered
            AuthorizationError: If the requested role cannot be self-assigned
        """
        if role not in SELF_REGISTRATION_ROLES:
            raise AuthorizationError(f"Cannot self-register with role: {role.value}")

        if await self.user_repository.get_by_email(email):
            logger.info(f"Registration rejected, email already in use: {email}")
            raise DuplicateResourceError("User already exists", resource_type="user", field="email")

        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            phone=phone,
            address=address,
        )
        user = await self.user_repository.create(user)
        logger.info(f"User registered: {user.id} ({user.role.value})")
        return user

    async def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and issue an access token.

        Returns:
            Tuple[User, str]: The user and a signed bearer token

        Raises:
            AuthenticationError: If the credentials are wrong
            AuthorizationError: If the account is not active
        """
        user = await self.user_repository.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationError("Invalid credentials")

        if user.status != UserStatus.ACTIVE:
            raise AuthorizationError(f"Account is {user.status.value}")

        user.last_login_at = utcnow()
        user = await self.user_repository.update(user)

        token = create_access_token({"sub": user.id, "role": user.role.value})
        logger.info(f"User logged in: {user.id}")
        return user, token

    async def get_user(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)
        return user
