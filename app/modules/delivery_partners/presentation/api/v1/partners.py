# 📄 File: app/modules/delivery_partners/presentation/api/v1/partners.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints riders use to sign up, go online, share their position, and that
# admins use to review and approve riders.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router for the delivery partner aggregate: self-service onboarding, availability
# and location updates, admin listing and moderation.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.delivery_partners.domain.services.partner_service
# - app.modules.delivery_partners.presentation.api.schemas.partner_schemas
# - app.shared.core.dependencies (authentication and role guards)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/delivery-partners)

"""
Delivery Partner API Endpoints

Endpoints:
- POST /: Register the caller as a delivery partner
- GET /: List partners (admin)
- GET /me: The caller's partner profile
- GET /{partner_id}: Partner profile (self/admin)
- PUT /{partner_id}/status: Moderation (admin)
- PUT /{partner_id}/availability: Go online/offline (self)
- PUT /{partner_id}/location: Report current position (self)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.delivery_partners.domain.models.delivery_partner import PartnerStatus
from app.modules.delivery_partners.domain.services.partner_service import PartnerService
from app.modules.delivery_partners.presentation.api.schemas.partner_schemas import (
    AvailabilityRequest,
    LocationRequest,
    PartnerCreateRequest,
    PartnerListResponse,
    PartnerResponse,
    PartnerStatusRequest,
)
from app.shared.core.dependencies import (
    ROLE_DELIVERY,
    CurrentUser,
    PaginationParams,
    get_current_admin_user,
    get_current_user,
    get_pagination_params,
    require_role,
)
from app.shared.utils.helpers import total_pages

logger = logging.getLogger(__name__)

partners_router = APIRouter()


@partners_router.post(
    "",
    response_model=PartnerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as a delivery partner",
    responses={
        400: {"description": "Invalid data or profile already exists"},
        403: {"description": "Caller is not a delivery account"},
    }
)
async def register_partner(
    payload: PartnerCreateRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_DELIVERY)),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.register_partner(current_user.user_id, payload.model_dump())
    return PartnerResponse.from_domain(partner)


@partners_router.get(
    "",
    response_model=PartnerListResponse,
    summary="List delivery partners (admin)",
)
async def list_partners(
    partner_status: Optional[PartnerStatus] = Query(None, alias="status"),
    is_online: Optional[bool] = Query(None),
    pagination: PaginationParams = Depends(get_pagination_params),
    admin: CurrentUser = Depends(get_current_admin_user),
    partner_service: PartnerService = Depends(),
) -> PartnerListResponse:
    partners, total = await partner_service.list_partners(
        status=partner_status,
        is_online=is_online,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return PartnerListResponse(
        items=[PartnerResponse.from_domain(p) for p in partners],
        total=total,
        page=pagination.page,
        pages=total_pages(total, pagination.limit),
    )


@partners_router.get(
    "/me",
    response_model=PartnerResponse,
    summary="Get the caller's partner profile",
)
async def get_my_profile(
    current_user: CurrentUser = Depends(require_role(ROLE_DELIVERY)),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.get_my_profile(current_user.user_id)
    return PartnerResponse.from_domain(partner)


@partners_router.get(
    "/{partner_id}",
    response_model=PartnerResponse,
    summary="Get a delivery partner",
)
async def get_partner(
    partner_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.get_partner(current_user, partner_id)
    return PartnerResponse.from_domain(partner)


@partners_router.put(
    "/{partner_id}/status",
    response_model=PartnerResponse,
    summary="Change delivery partner status (admin)",
)
async def update_partner_status(
    partner_id: str,
    payload: PartnerStatusRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.set_status(partner_id, payload.status)
    logger.info(f"Admin {admin.user_id} set delivery partner {partner_id} to {payload.status.value}")
    return PartnerResponse.from_domain(partner)


@partners_router.put(
    "/{partner_id}/availability",
    response_model=PartnerResponse,
    summary="Go online or offline",
)
async def update_availability(
    partner_id: str,
    payload: AvailabilityRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_DELIVERY)),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.set_availability(current_user, partner_id, payload.is_online)
    return PartnerResponse.from_domain(partner)


@partners_router.put(
    "/{partner_id}/location",
    response_model=PartnerResponse,
    summary="Report current location",
)
async def update_location(
    partner_id: str,
    payload: LocationRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_DELIVERY)),
    partner_service: PartnerService = Depends(),
) -> PartnerResponse:
    partner = await partner_service.update_location(current_user, partner_id, payload.to_point())
    return PartnerResponse.from_domain(partner)
