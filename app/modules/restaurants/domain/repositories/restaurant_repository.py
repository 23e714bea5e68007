# 📄 File: app/modules/restaurants/domain/repositories/restaurant_repository.py
# 🧭 Purpose (Layman Explanation):
# The list of things the app can ask the restaurant storage to do: save a restaurant,
# look one up, search the catalogue and change its menu.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Restaurant aggregate and its menu items, including a
# row-locking load used when order processing updates restaurant aggregates.
# 🔗 Dependencies:
# Domain models (Restaurant, MenuItem), typing, abc
# 🔄 Connected Modules / Calls From:
# RestaurantService, order command handlers, admin dashboard

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from ..models.restaurant import MenuItem, Restaurant, RestaurantStatus


class RestaurantRepository(ABC):
    """
    Repository interface for Restaurant aggregate data access.

    Menu items are owned by their restaurant and are only reachable
    through it.
    """

    @abstractmethod
    async def create(self, restaurant: Restaurant) -> Restaurant:
        """
        Persist a new restaurant.

        Raises:
            DuplicateResourceError: If the owner already has a restaurant
        """

    @abstractmethod
    async def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        """Get restaurant (with menu) by ID."""

    @abstractmethod
    async def get_for_update(self, restaurant_id: str) -> Optional[Restaurant]:
        """Get restaurant by ID, locking its row for the rest of the transaction."""

    @abstractmethod
    async def get_by_owner(self, owner_id: str) -> Optional[Restaurant]:
        """Get the restaurant owned by a user."""

    @abstractmethod
    async def list(
        self,
        status: Optional[RestaurantStatus] = None,
        cuisine: Optional[str] = None,
        is_open: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Restaurant], int]:
        """List restaurants matching the filters, returning the page and total count."""

    @abstractmethod
    async def update(self, restaurant: Restaurant) -> Restaurant:
        """Persist profile, status and aggregate fields (menu excluded)."""

    @abstractmethod
    async def add_menu_item(self, restaurant_id: str, item: MenuItem) -> MenuItem:
        """Append an item to the restaurant's menu."""

    @abstractmethod
    async def update_menu_item(self, restaurant_id: str, item: MenuItem) -> MenuItem:
        """Persist changes to an existing menu item."""

    @abstractmethod
    async def remove_menu_item(self, restaurant_id: str, item_id: str) -> None:
        """Remove an item from the menu. Its id is never reused."""

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        """Number of restaurants per status."""
