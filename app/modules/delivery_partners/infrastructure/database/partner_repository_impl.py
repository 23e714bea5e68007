# 📄 File: app/modules/delivery_partners/infrastructure/database/partner_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving and loading of rider profiles in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of DeliveryPartnerRepository with domain/model mapping,
# duplicate-profile detection, row locking and optimistic version checks.
#
# 🔗 Dependencies:
# - app.modules.delivery_partners.domain.repositories.partner_repository (interface)
# - app.modules.delivery_partners.infrastructure.database.models
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - PartnerService, order command handlers, admin dashboard
# - app.main (dependency override registration)

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.modules.delivery_partners.domain.models.delivery_partner import DeliveryPartner, PartnerStatus
from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.delivery_partners.infrastructure.database.models import DeliveryPartnerModel
from app.shared.core.exceptions import ConcurrencyConflictError, DuplicateResourceError, NotFoundError
from app.shared.core.geo import GeoPoint
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class DeliveryPartnerRepositoryImpl(DeliveryPartnerRepository):
    """
    SQLAlchemy implementation of the DeliveryPartnerRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, partner: DeliveryPartner) -> DeliveryPartner:
        model = self._domain_to_model(partner)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning(f"Partner creation failed - user already registered: {partner.user_id}")
            raise DuplicateResourceError(
                "Delivery partner profile already exists",
                resource_type="delivery_partner",
                field="user_id",
            ) from e

        logger.info(f"Created delivery partner with ID: {model.id}")
        return self._model_to_domain(model)

    async def get_by_id(self, partner_id: str) -> Optional[DeliveryPartner]:
        model = await self._session.get(DeliveryPartnerModel, partner_id)
        return self._model_to_domain(model) if model else None

    async def get_for_update(self, partner_id: str) -> Optional[DeliveryPartner]:
        stmt = (
            select(DeliveryPartnerModel)
            .where(DeliveryPartnerModel.id == partner_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def get_by_user(self, user_id: str) -> Optional[DeliveryPartner]:
        stmt = select(DeliveryPartnerModel).where(DeliveryPartnerModel.user_id == user_id)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def list(
        self,
        status: Optional[PartnerStatus] = None,
        is_online: Optional[bool] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[DeliveryPartner], int]:
        conditions = []
        if status is not None:
            conditions.append(DeliveryPartnerModel.status == status.value)
        if is_online is not None:
            conditions.append(DeliveryPartnerModel.is_online == is_online)

        count_stmt = select(func.count(DeliveryPartnerModel.id)).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(DeliveryPartnerModel)
            .where(*conditions)
            .order_by(DeliveryPartnerModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()], total

    async def update(self, partner: DeliveryPartner) -> DeliveryPartner:
        model = await self._session.get(DeliveryPartnerModel, partner.id)
        if model is None:
            raise NotFoundError(
                "Delivery partner not found",
                resource_type="delivery_partner",
                resource_id=partner.id,
            )

        model.vehicle = partner.vehicle.model_dump(mode="json")
        model.documents = dict(partner.documents)
        model.bank_details = partner.bank_details.model_dump() if partner.bank_details else None
        model.preferred_zones = list(partner.preferred_zones)
        model.working_hours = partner.working_hours.model_dump() if partner.working_hours else None
        model.status = partner.status.value
        model.is_online = partner.is_online
        model.is_verified = partner.is_verified
        model.longitude = partner.current_location.longitude if partner.current_location else None
        model.latitude = partner.current_location.latitude if partner.current_location else None
        model.current_order_id = partner.current_order_id
        model.last_active = partner.last_active
        model.commission = partner.commission
        model.rating = partner.rating
        model.total_ratings = partner.total_ratings
        model.total_deliveries = partner.total_deliveries
        model.total_earnings = partner.total_earnings
        model.average_delivery_time = partner.average_delivery_time
        model.updated_at = utcnow()

        try:
            await self._session.flush()
        except StaleDataError as e:
            logger.warning(f"Concurrent modification of delivery partner {partner.id}")
            raise ConcurrencyConflictError(resource_type="delivery_partner", resource_id=partner.id) from e

        return self._model_to_domain(model)

    async def count_by_status(self) -> Dict[str, int]:
        stmt = select(DeliveryPartnerModel.status, func.count(DeliveryPartnerModel.id)).group_by(
            DeliveryPartnerModel.status
        )
        result = await self._session.execute(stmt)
        return {status: count for status, count in result.all()}

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, partner: DeliveryPartner) -> DeliveryPartnerModel:
        return DeliveryPartnerModel(
            id=partner.id,
            user_id=partner.user_id,
            vehicle=partner.vehicle.model_dump(mode="json"),
            documents=dict(partner.documents),
            bank_details=partner.bank_details.model_dump() if partner.bank_details else None,
            preferred_zones=list(partner.preferred_zones),
            working_hours=partner.working_hours.model_dump() if partner.working_hours else None,
            status=partner.status.value,
            is_online=partner.is_online,
            is_verified=partner.is_verified,
            longitude=partner.current_location.longitude if partner.current_location else None,
            latitude=partner.current_location.latitude if partner.current_location else None,
            current_order_id=partner.current_order_id,
            last_active=partner.last_active,
            commission=partner.commission,
            rating=partner.rating,
            total_ratings=partner.total_ratings,
            total_deliveries=partner.total_deliveries,
            total_earnings=partner.total_earnings,
            average_delivery_time=partner.average_delivery_time,
            created_at=partner.created_at,
            updated_at=partner.updated_at,
        )

    def _model_to_domain(self, model: DeliveryPartnerModel) -> DeliveryPartner:
        location = None
        if model.longitude is not None and model.latitude is not None:
            location = GeoPoint(coordinates=[model.longitude, model.latitude])

        return DeliveryPartner(
            id=model.id,
            user_id=model.user_id,
            vehicle=model.vehicle,
            documents=model.documents or {},
            bank_details=model.bank_details,
            preferred_zones=model.preferred_zones or [],
            working_hours=model.working_hours,
            status=model.status,
            is_online=model.is_online,
            is_verified=model.is_verified,
            current_location=location,
            current_order_id=model.current_order_id,
            last_active=ensure_utc(model.last_active),
            commission=model.commission if model.commission is not None else Decimal("80"),
            rating=model.rating or 0.0,
            total_ratings=model.total_ratings or 0,
            total_deliveries=model.total_deliveries or 0,
            total_earnings=model.total_earnings if model.total_earnings is not None else Decimal("0.00"),
            average_delivery_time=model.average_delivery_time or 0.0,
            version=model.version,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
