# 📄 File: app/modules/delivery_partners/domain/models/delivery_partner.py
# 🧭 Purpose (Layman Explanation):
# Describes a delivery rider: their vehicle, paperwork, where they are right now, whether
# they are online, the order they are carrying and how much they have earned.
# 🧪 Purpose (Technical Summary):
# DeliveryPartner aggregate root (1:1 with a User) with vehicle/document/bank metadata,
# live location, availability flags and running aggregates maintained by order settlement
# and rating.
# 🔗 Dependencies:
# pydantic, decimal, app.shared.core.geo, app.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# partner_service.py, partner_repository.py, order command handlers (assignment, settlement, rating)

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.geo import GeoPoint
from app.shared.utils.helpers import generate_id, utcnow


class PartnerStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    OFFLINE = "offline"


class VehicleType(str, Enum):
    BICYCLE = "bicycle"
    MOTORCYCLE = "motorcycle"
    CAR = "car"
    SCOOTER = "scooter"
    BIKE = "bike"


class Vehicle(BaseModel):
    type: VehicleType
    number: str = Field(..., min_length=1, max_length=30)
    color: Optional[str] = Field(None, max_length=30)
    model: Optional[str] = Field(None, max_length=60)
    year: Optional[int] = Field(None, ge=1950, le=2100)


class BankDetails(BaseModel):
    account_number: str = Field(..., min_length=4, max_length=34)
    account_holder_name: str = Field(..., min_length=1, max_length=100)
    bank_name: str = Field(..., min_length=1, max_length=100)
    ifsc_code: Optional[str] = Field(None, max_length=20)


class WorkingHours(BaseModel):
    start: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    end: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    days: List[str] = Field(default_factory=list)


class DeliveryPartner(BaseModel):
    """
    Delivery partner aggregate root.

    Invariants:
    - ``rating`` stays within [0, 5]
    - ``commission`` (share of the delivery fee, percent) stays within [0, 100]
    - a partner carries at most one order at a time (``current_order_id``)
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    user_id: str
    vehicle: Vehicle
    documents: Dict[str, str] = Field(default_factory=dict)
    bank_details: Optional[BankDetails] = None
    preferred_zones: List[str] = Field(default_factory=list)
    working_hours: Optional[WorkingHours] = None

    status: PartnerStatus = PartnerStatus.PENDING
    is_online: bool = False
    is_verified: bool = False
    current_location: Optional[GeoPoint] = None
    current_order_id: Optional[str] = None
    last_active: datetime = Field(default_factory=utcnow)

    commission: Decimal = Field(default=Decimal("80"), ge=0, le=100)
    rating: float = Field(default=0.0, ge=0, le=5)
    total_ratings: int = Field(default=0, ge=0)
    total_deliveries: int = Field(default=0, ge=0)
    total_earnings: Decimal = Decimal("0.00")
    average_delivery_time: float = 0.0

    version: int = 1
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_available(self) -> bool:
        """Active, online and not carrying an order."""
        return (
            self.status == PartnerStatus.ACTIVE
            and self.is_online
            and self.current_order_id is None
        )
