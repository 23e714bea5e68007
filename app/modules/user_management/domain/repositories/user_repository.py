# 📄 File: app/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save and find user accounts without saying which
# database is used underneath.
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities following the Repository pattern and
# dependency inversion; implemented in the infrastructure layer.
# 🔗 Dependencies:
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From:
# AuthService, UserService, authentication middleware, order creation, admin dashboard

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from ..models.user import User, UserRole, UserStatus


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - All operations are async for non-blocking I/O
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            DuplicateResourceError: If a user with the email already exists
        """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, None when absent."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (case-insensitive) email address."""

    @abstractmethod
    async def list(
        self,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        """
        Page of users, newest first, with the total number of matches.

        ``search`` matches name, email or phone case-insensitively.
        """

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes to an existing user."""

    @abstractmethod
    async def record_order_placed(self, user_id: str, amount) -> None:
        """Increment the customer's order count and total spend."""

    @abstractmethod
    async def count_by_role(self) -> Dict[str, int]:
        """Number of users per role."""
