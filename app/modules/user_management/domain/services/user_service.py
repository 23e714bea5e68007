# 📄 File: app/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# Lets an admin look through everyone who has an account and switch an account off
# (suspend it) or back on.
# 🧪 Purpose (Technical Summary):
# Domain service for user administration: filtered pagination over UserRepository and
# account status changes. Accounts are never deleted; a suspended account fails
# authentication on its next request because the middleware reloads the user.
# 🔗 Dependencies:
# UserRepository, app.shared.core.exceptions, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.modules.admin.presentation.api.v1.admin

import logging
from typing import List, Optional, Tuple

from fastapi import Depends

from ..models.user import User, UserRole, UserStatus
from ..repositories.user_repository import UserRepository
from app.shared.core.exceptions import InvalidStateError, NotFoundError
from app.shared.utils.logging import log_business_event

logger = logging.getLogger(__name__)


class UserService:
    """
    Domain service for user administration.
    """

    def __init__(self, user_repository: UserRepository = Depends()):
        self.user_repository = user_repository

    async def list_users(
        self,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        return await self.user_repository.list(
            role=role,
            status=status,
            search=search.strip() if search else None,
            offset=offset,
            limit=limit,
        )

    async def update_user_status(self, user_id: str, status: UserStatus, updated_by: str) -> User:
        """
        Change an account's status.

        Raises:
            NotFoundError: If the user does not exist
            InvalidStateError: If an admin tries to change their own status
        """
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)
        if user.id == updated_by:
            raise InvalidStateError("Admins cannot change their own account status", rule="not_self")

        if user.status == status:
            return user

        previous = user.status
        user.status = status
        user = await self.user_repository.update(user)

        log_business_event(
            logger,
            "user.status_changed",
            f"User {user.email} moved from {previous.value} to {status.value}",
            entity_id=user.id,
            entity_type="user",
            previous_status=previous.value,
            new_status=status.value,
            actor_id=updated_by,
        )
        return user
