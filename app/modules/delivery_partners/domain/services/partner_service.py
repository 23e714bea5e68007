# 📄 File: app/modules/delivery_partners/domain/services/partner_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for riders: signing up as a rider, going online and offline, reporting where
# they are, and admins approving or suspending riders.
# 🧪 Purpose (Technical Summary):
# Domain service for delivery partner onboarding, availability, live location updates
# (published as PartnerLocationUpdated events) and admin moderation, with self/admin
# access checks against the authenticated caller.
# 🔗 Dependencies:
# Domain models, DeliveryPartnerRepository, app.shared.core (event bus, exceptions)
# 🔄 Connected Modules / Calls From:
# Delivery partner API endpoints (app.modules.delivery_partners.presentation.api.v1.partners)

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends

from app.shared.core.dependencies import CurrentUser
from app.shared.core.event_bus import EventBus, get_event_bus
from app.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    InvalidStateError,
    NotFoundError,
)
from app.shared.core.geo import GeoPoint
from app.shared.utils.helpers import utcnow

from ..events.partner_events import PartnerLocationUpdated
from ..models.delivery_partner import DeliveryPartner, PartnerStatus
from ..repositories.partner_repository import DeliveryPartnerRepository

logger = logging.getLogger(__name__)


class PartnerService:
    """
    Domain service for delivery partner business logic.

    Business rules:
    - A user has at most one partner profile
    - New partners start ``pending``; only admins change status
    - Setting status ``offline`` also takes the partner offline
    - Only active partners can go online
    - Partners may only read and update their own profile; admins may read all
    """

    def __init__(
        self,
        partner_repository: DeliveryPartnerRepository = Depends(),
        event_bus: EventBus = Depends(get_event_bus),
    ):
        self.partner_repository = partner_repository
        self.event_bus = event_bus

    async def register_partner(self, user_id: str, data: Dict[str, Any]) -> DeliveryPartner:
        """
        Create the caller's delivery partner profile.

        Raises:
            DuplicateResourceError: If the user already has a profile
        """
        if await self.partner_repository.get_by_user(user_id):
            raise DuplicateResourceError(
                "Delivery partner profile already exists",
                resource_type="delivery_partner",
                field="user_id",
            )

        partner = DeliveryPartner(user_id=user_id, **data)
        partner = await self.partner_repository.create(partner)
        logger.info(f"Delivery partner {partner.id} registered for user {user_id}")
        return partner

    async def get_my_profile(self, user_id: str) -> DeliveryPartner:
        partner = await self.partner_repository.get_by_user(user_id)
        if partner is None:
            raise NotFoundError("Delivery partner not found", resource_type="delivery_partner")
        return partner

    async def get_partner(self, actor: CurrentUser, partner_id: str) -> DeliveryPartner:
        return await self._get_accessible(actor, partner_id)

    async def list_partners(
        self,
        status: Optional[PartnerStatus] = None,
        is_online: Optional[bool] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[DeliveryPartner], int]:
        return await self.partner_repository.list(
            status=status,
            is_online=is_online,
            offset=offset,
            limit=limit,
        )

    async def set_status(self, partner_id: str, status: PartnerStatus) -> DeliveryPartner:
        """Change the moderation status (admin only, enforced by the router)."""
        partner = await self._get_or_404(partner_id)
        previous = partner.status
        partner.status = status
        if status == PartnerStatus.ACTIVE:
            partner.is_verified = True
        else:
            partner.is_online = False

        partner = await self.partner_repository.update(partner)
        logger.info(f"Delivery partner {partner_id} status {previous.value} -> {status.value}")
        return partner

    async def set_availability(
        self,
        actor: CurrentUser,
        partner_id: str,
        is_online: bool,
    ) -> DeliveryPartner:
        """
        Go online or offline.

        Raises:
            InvalidStateError: If an inactive partner tries to go online
        """
        partner = await self._get_own(actor, partner_id)
        if is_online and partner.status != PartnerStatus.ACTIVE:
            raise InvalidStateError(
                "Delivery partner is not active",
                rule="partner_must_be_active",
                current_state=partner.status.value,
            )

        partner.is_online = is_online
        partner.last_active = utcnow()
        partner = await self.partner_repository.update(partner)
        logger.info(f"Delivery partner {partner_id} is now {'online' if is_online else 'offline'}")
        return partner

    async def update_location(
        self,
        actor: CurrentUser,
        partner_id: str,
        location: GeoPoint,
    ) -> DeliveryPartner:
        """Record the partner's position and announce it to watchers."""
        partner = await self._get_own(actor, partner_id)
        partner.current_location = location
        partner.last_active = utcnow()
        partner = await self.partner_repository.update(partner)

        await self.event_bus.publish(
            PartnerLocationUpdated.create(
                partner_id=partner.id,
                coordinates=location.coordinates,
                order_id=partner.current_order_id,
                user_id=actor.user_id,
            )
        )
        return partner

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_or_404(self, partner_id: str) -> DeliveryPartner:
        partner = await self.partner_repository.get_by_id(partner_id)
        if partner is None:
            raise NotFoundError(
                "Delivery partner not found",
                resource_type="delivery_partner",
                resource_id=partner_id,
            )
        return partner

    async def _get_accessible(self, actor: CurrentUser, partner_id: str) -> DeliveryPartner:
        partner = await self._get_or_404(partner_id)
        if not actor.is_admin() and partner.user_id != actor.user_id:
            raise AuthorizationError(
                "Not authorized to view this delivery partner",
                resource_type="delivery_partner",
                resource_id=partner_id,
            )
        return partner

    async def _get_own(self, actor: CurrentUser, partner_id: str) -> DeliveryPartner:
        partner = await self._get_or_404(partner_id)
        if partner.user_id != actor.user_id:
            raise AuthorizationError(
                "Not authorized to update this delivery partner",
                resource_type="delivery_partner",
                resource_id=partner_id,
            )
        return partner
