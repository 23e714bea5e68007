# 📄 File: app/modules/restaurants/domain/services/restaurant_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for running a restaurant on the marketplace: an owner can open one restaurant,
# edit its details and menu, and only admins can approve or suspend it.
# 🧪 Purpose (Technical Summary):
# Domain service for restaurant onboarding, profile and menu management, admin moderation
# and catalogue queries, with ownership checks against the authenticated caller.
# 🔗 Dependencies:
# Domain models, RestaurantRepository, app.shared.core (exceptions, CurrentUser)
# 🔄 Connected Modules / Calls From:
# Restaurant API endpoints (app.modules.restaurants.presentation.api.v1.restaurants)

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends

from app.shared.config.settings import get_settings
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthorizationError, DuplicateResourceError, NotFoundError

from ..models.restaurant import MenuItem, Restaurant, RestaurantStatus
from ..repositories.restaurant_repository import RestaurantRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {
    "name",
    "description",
    "cuisine",
    "address",
    "location",
    "contact",
    "images",
    "logo",
    "opening_hours",
    "is_open",
    "minimum_order",
    "delivery_fee",
}

MENU_ITEM_FIELDS = {
    "name",
    "description",
    "price",
    "category",
    "image",
    "is_available",
    "preparation_time",
}


class RestaurantService:
    """
    Domain service for restaurant business logic.

    Business rules:
    - A user owns at most one restaurant
    - New restaurants start ``pending`` and only admins change status
    - Only the owner or an admin edits the profile and menu
    - Commission is set by the platform, never by the owner
    """

    def __init__(self, restaurant_repository: RestaurantRepository = Depends()):
        self.restaurant_repository = restaurant_repository
        self.settings = get_settings()

    async def create_restaurant(self, owner_id: str, data: Dict[str, Any]) -> Restaurant:
        """
        Register a restaurant for its owner.

        Raises:
            DuplicateResourceError: If the owner already has a restaurant
        """
        if await self.restaurant_repository.get_by_owner(owner_id):
            raise DuplicateResourceError(
                "You already own a restaurant",
                resource_type="restaurant",
                field="owner_id",
            )

        data.pop("commission", None)
        restaurant = Restaurant(owner_id=owner_id, commission=self.settings.DEFAULT_RESTAURANT_COMMISSION, **data)
        restaurant = await self.restaurant_repository.create(restaurant)
        logger.info(f"Restaurant {restaurant.id} registered by owner {owner_id}")
        return restaurant

    async def get_restaurant(
        self,
        restaurant_id: str,
        viewer: Optional[CurrentUser] = None,
    ) -> Restaurant:
        """
        Get a restaurant for display.

        Restaurants that are not active are only visible to their owner and admins.
        """
        restaurant = await self._get_or_404(restaurant_id)
        if restaurant.status != RestaurantStatus.ACTIVE and not self._can_manage(restaurant, viewer):
            raise NotFoundError("Restaurant not found", resource_type="restaurant", resource_id=restaurant_id)
        return restaurant

    async def get_my_restaurant(self, owner_id: str) -> Restaurant:
        restaurant = await self.restaurant_repository.get_by_owner(owner_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found", resource_type="restaurant")
        return restaurant

    async def list_restaurants(
        self,
        viewer: Optional[CurrentUser] = None,
        status: Optional[RestaurantStatus] = None,
        cuisine: Optional[str] = None,
        is_open: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Restaurant], int]:
        """
        List restaurants. Everyone but admins only sees active restaurants.
        """
        if viewer is None or not viewer.is_admin():
            status = RestaurantStatus.ACTIVE

        return await self.restaurant_repository.list(
            status=status,
            cuisine=cuisine,
            is_open=is_open,
            search=search,
            offset=offset,
            limit=limit,
        )

    async def update_restaurant(
        self,
        actor: CurrentUser,
        restaurant_id: str,
        changes: Dict[str, Any],
    ) -> Restaurant:
        """
        Update profile fields of a restaurant.

        Raises:
            NotFoundError: If the restaurant does not exist
            AuthorizationError: If the caller is neither owner nor admin
        """
        restaurant = await self._get_managed(actor, restaurant_id)

        merged = restaurant.model_dump()
        merged.update({key: value for key, value in changes.items() if key in PROFILE_FIELDS})

        restaurant = await self.restaurant_repository.update(Restaurant.model_validate(merged))
        logger.info(f"Restaurant {restaurant_id} updated by {actor.user_id}: {sorted(changes)}")
        return restaurant

    async def set_status(self, restaurant_id: str, status: RestaurantStatus) -> Restaurant:
        """Change the moderation status (admin only, enforced by the router)."""
        restaurant = await self._get_or_404(restaurant_id)
        previous = restaurant.status
        restaurant.status = status
        if status != RestaurantStatus.ACTIVE:
            restaurant.is_open = False

        restaurant = await self.restaurant_repository.update(restaurant)
        logger.info(f"Restaurant {restaurant_id} status {previous.value} -> {status.value}")
        return restaurant

    # =========================================================================
    # MENU
    # =========================================================================

    async def add_menu_item(
        self,
        actor: CurrentUser,
        restaurant_id: str,
        data: Dict[str, Any],
    ) -> MenuItem:
        await self._get_managed(actor, restaurant_id)
        item = MenuItem(**data)
        return await self.restaurant_repository.add_menu_item(restaurant_id, item)

    async def update_menu_item(
        self,
        actor: CurrentUser,
        restaurant_id: str,
        item_id: str,
        changes: Dict[str, Any],
    ) -> MenuItem:
        restaurant = await self._get_managed(actor, restaurant_id)
        item = restaurant.find_menu_item(item_id)
        if item is None:
            raise NotFoundError("Menu item not found", resource_type="menu_item", resource_id=item_id)

        merged = item.model_dump()
        merged.update({key: value for key, value in changes.items() if key in MENU_ITEM_FIELDS})
        return await self.restaurant_repository.update_menu_item(restaurant_id, MenuItem(**merged))

    async def remove_menu_item(self, actor: CurrentUser, restaurant_id: str, item_id: str) -> None:
        restaurant = await self._get_managed(actor, restaurant_id)
        if restaurant.find_menu_item(item_id) is None:
            raise NotFoundError("Menu item not found", resource_type="menu_item", resource_id=item_id)
        await self.restaurant_repository.remove_menu_item(restaurant_id, item_id)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_or_404(self, restaurant_id: str) -> Restaurant:
        restaurant = await self.restaurant_repository.get_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found", resource_type="restaurant", resource_id=restaurant_id)
        return restaurant

    async def _get_managed(self, actor: CurrentUser, restaurant_id: str) -> Restaurant:
        restaurant = await self._get_or_404(restaurant_id)
        if not self._can_manage(restaurant, actor):
            raise AuthorizationError(
                "Not authorized to manage this restaurant",
                resource_type="restaurant",
                resource_id=restaurant_id,
            )
        return restaurant

    @staticmethod
    def _can_manage(restaurant: Restaurant, user: Optional[CurrentUser]) -> bool:
        if user is None:
            return False
        return user.is_admin() or restaurant.owner_id == user.user_id
