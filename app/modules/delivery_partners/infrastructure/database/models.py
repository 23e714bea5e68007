# 📄 File: app/modules/delivery_partners/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how rider profiles are stored in the database, one row per rider.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the delivery_partners table: versioned for optimistic
# concurrency, user_id unique for the 1:1 link to users, JSON metadata columns and
# float longitude/latitude for the live location.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - partner_repository_impl.py
# - migrations/versions (schema)

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, Numeric, String

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import utcnow


class DeliveryPartnerModel(DatabaseBase):
    """
    SQLAlchemy model for delivery partners.
    """
    __tablename__ = "delivery_partners"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True)
    vehicle = Column(JSON, nullable=False)
    documents = Column(JSON, nullable=False, default=dict)
    bank_details = Column(JSON, nullable=True)
    preferred_zones = Column(JSON, nullable=False, default=list)
    working_hours = Column(JSON, nullable=True)

    status = Column(String(20), nullable=False, default="pending", index=True)
    is_online = Column(Boolean, nullable=False, default=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    # No FK: orders reference partners, keeping the two tables acyclic
    current_order_id = Column(String(36), nullable=True)
    last_active = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    commission = Column(Numeric(5, 2), nullable=False, default=80)
    rating = Column(Float, nullable=False, default=0.0)
    total_ratings = Column(Integer, nullable=False, default=0)
    total_deliveries = Column(Integer, nullable=False, default=0)
    total_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    average_delivery_time = Column(Float, nullable=False, default=0.0)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<DeliveryPartnerModel(id={self.id}, user_id={self.user_id}, status={self.status})>"
