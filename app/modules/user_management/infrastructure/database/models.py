# 📄 File: app/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts are stored in the database table, one row per
# customer, restaurant owner, rider or admin.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the users table with a unique lower-cased email,
# role/status columns, JSON address and customer spend aggregates.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - migrations/versions (schema)

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Integer, Numeric, String

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import utcnow


class UserModel(DatabaseBase):
    """
    SQLAlchemy model for user accounts.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(String(20), nullable=False, default="customer", index=True)
    status = Column(String(20), nullable=False, default="active")
    address = Column(JSON, nullable=True)
    avatar = Column(String(500), nullable=True)

    total_orders = Column(Integer, nullable=False, default=0)
    total_spent = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"
