# 📄 File: app/modules/delivery_partners/domain/repositories/partner_repository.py
# 🧭 Purpose (Layman Explanation):
# The list of things the app can ask the rider storage to do: save a rider profile,
# find one, and list riders for admins.
# 🧪 Purpose (Technical Summary):
# Repository interface for the DeliveryPartner aggregate, including a row-locking load
# used when order processing updates partner aggregates.
# 🔗 Dependencies:
# Domain models (DeliveryPartner), typing, abc
# 🔄 Connected Modules / Calls From:
# PartnerService, order command handlers, admin dashboard

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from ..models.delivery_partner import DeliveryPartner, PartnerStatus


class DeliveryPartnerRepository(ABC):
    """
    Repository interface for DeliveryPartner data access operations.
    """

    @abstractmethod
    async def create(self, partner: DeliveryPartner) -> DeliveryPartner:
        """
        Persist a new delivery partner profile.

        Raises:
            DuplicateResourceError: If the user already has a partner profile
        """

    @abstractmethod
    async def get_by_id(self, partner_id: str) -> Optional[DeliveryPartner]:
        """Get partner by ID."""

    @abstractmethod
    async def get_for_update(self, partner_id: str) -> Optional[DeliveryPartner]:
        """Get partner by ID, locking its row for the rest of the transaction."""

    @abstractmethod
    async def get_by_user(self, user_id: str) -> Optional[DeliveryPartner]:
        """Get the partner profile belonging to a user."""

    @abstractmethod
    async def list(
        self,
        status: Optional[PartnerStatus] = None,
        is_online: Optional[bool] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[DeliveryPartner], int]:
        """List partners matching the filters, returning the page and total count."""

    @abstractmethod
    async def update(self, partner: DeliveryPartner) -> DeliveryPartner:
        """Persist changes to an existing partner."""

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        """Number of partners per status."""
