# 📄 File: app/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles all database operations for user accounts, like creating new users,
# finding existing users and updating their information.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository with domain/model mapping,
# duplicate-email detection and atomic counter updates for customer stats.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain.repositories.user_repository (interface)
# - app.modules.user_management.infrastructure.database.models (UserModel)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - AuthService, authentication middleware, order command handlers
# - app.main (dependency override registration)

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.user import User, UserRole, UserStatus
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.user_management.infrastructure.database.models import UserModel
from app.shared.core.exceptions import DuplicateResourceError
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, user: User) -> User:
        user_model = self._domain_to_model(user)
        self._session.add(user_model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning(f"User creation failed - email already exists: {user.email}")
            raise DuplicateResourceError(
                "User already exists",
                resource_type="user",
                field="email",
            ) from e

        logger.info(f"Created user with ID: {user_model.id}")
        return self._model_to_domain(user_model)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user_model = await self._session.get(UserModel, user_id)
        return self._model_to_domain(user_model) if user_model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.lower().strip())
        result = await self._session.execute(stmt)
        user_model = result.scalar_one_or_none()
        return self._model_to_domain(user_model) if user_model else None

    async def list(
        self,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        conditions = []
        if role is not None:
            conditions.append(UserModel.role == role.value)
        if status is not None:
            conditions.append(UserModel.status == status.value)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(UserModel.name).like(pattern),
                    func.lower(UserModel.email).like(pattern),
                    UserModel.phone.like(f"%{search}%"),
                )
            )

        count_stmt = select(func.count(UserModel.id)).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(UserModel)
            .where(*conditions)
            .order_by(UserModel.created_at.desc(), UserModel.email)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()], total

    async def update(self, user: User) -> User:
        user_model = await self._session.get(UserModel, user.id)
        if user_model is None:
            raise ValueError(f"User {user.id} does not exist")

        user_model.name = user.name
        user_model.phone = user.phone
        user_model.status = user.status.value
        user_model.address = user.address.model_dump() if user.address else None
        user_model.avatar = user.avatar
        user_model.last_login_at = user.last_login_at
        user_model.updated_at = utcnow()
        await self._session.flush()
        return self._model_to_domain(user_model)

    async def record_order_placed(self, user_id: str, amount: Decimal) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                total_orders=UserModel.total_orders + 1,
                total_spent=UserModel.total_spent + amount,
            )
        )
        await self._session.execute(stmt)

    async def count_by_role(self) -> Dict[str, int]:
        stmt = select(UserModel.role, func.count(UserModel.id)).group_by(UserModel.role)
        result = await self._session.execute(stmt)
        return {role: count for role, count in result.all()}

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            phone=user.phone,
            role=user.role.value,
            status=user.status.value,
            address=user.address.model_dump() if user.address else None,
            avatar=user.avatar,
            total_orders=user.total_orders,
            total_spent=user.total_spent,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
        )

    def _model_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            phone=model.phone,
            role=model.role,
            status=model.status,
            address=model.address,
            avatar=model.avatar,
            total_orders=model.total_orders or 0,
            total_spent=model.total_spent if model.total_spent is not None else Decimal("0.00"),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            last_login_at=ensure_utc(model.last_login_at),
        )
