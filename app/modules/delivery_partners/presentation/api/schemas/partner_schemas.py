# 📄 File: app/modules/delivery_partners/presentation/api/schemas/partner_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the forms for signing up as a rider, going online, sharing a location, and how
# rider profiles look in API responses.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for delivery partner onboarding, availability,
# location updates and admin moderation. Bank details are never echoed back in full.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.delivery_partners.domain.models.delivery_partner
#
# 🔄 Connected Modules / Calls From:
# - app.modules.delivery_partners.presentation.api.v1.partners

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.modules.delivery_partners.domain.models.delivery_partner import (
    BankDetails,
    DeliveryPartner,
    PartnerStatus,
    Vehicle,
    WorkingHours,
)
from app.shared.core.geo import GeoPoint
from app.shared.utils.validators import validate_coordinates


class PartnerCreateRequest(BaseModel):
    """Delivery partner registration request."""

    vehicle: Vehicle
    documents: Dict[str, str] = Field(
        default_factory=dict,
        description="Document name to file URL, e.g. driving_license, insurance",
    )
    bank_details: Optional[BankDetails] = None
    preferred_zones: List[str] = Field(default_factory=list)
    working_hours: Optional[WorkingHours] = None


class PartnerStatusRequest(BaseModel):
    status: PartnerStatus


class AvailabilityRequest(BaseModel):
    is_online: bool


class LocationRequest(BaseModel):
    """A position; coordinates are ``[longitude, latitude]``."""

    coordinates: List[float]

    @field_validator("coordinates", mode="before")
    @classmethod
    def check_coordinates(cls, v):
        return validate_coordinates(v)

    def to_point(self) -> GeoPoint:
        return GeoPoint(coordinates=self.coordinates)


class PartnerResponse(BaseModel):
    id: str
    user_id: str
    vehicle: Vehicle
    documents: Dict[str, str]
    bank_account_last4: Optional[str] = None
    preferred_zones: List[str]
    working_hours: Optional[WorkingHours] = None
    status: str
    is_online: bool
    is_verified: bool
    current_location: Optional[GeoPoint] = None
    current_order_id: Optional[str] = None
    last_active: datetime
    commission: float
    rating: float
    total_ratings: int
    total_deliveries: int
    total_earnings: float
    average_delivery_time: float
    created_at: datetime

    @classmethod
    def from_domain(cls, partner: DeliveryPartner) -> "PartnerResponse":
        return cls(
            id=partner.id,
            user_id=partner.user_id,
            vehicle=partner.vehicle,
            documents=partner.documents,
            bank_account_last4=(
                partner.bank_details.account_number[-4:] if partner.bank_details else None
            ),
            preferred_zones=partner.preferred_zones,
            working_hours=partner.working_hours,
            status=partner.status.value,
            is_online=partner.is_online,
            is_verified=partner.is_verified,
            current_location=partner.current_location,
            current_order_id=partner.current_order_id,
            last_active=partner.last_active,
            commission=float(partner.commission),
            rating=partner.rating,
            total_ratings=partner.total_ratings,
            total_deliveries=partner.total_deliveries,
            total_earnings=float(partner.total_earnings),
            average_delivery_time=partner.average_delivery_time,
            created_at=partner.created_at,
        )


class PartnerListResponse(BaseModel):
    items: List[PartnerResponse]
    total: int
    page: int
    pages: int
