# 📄 File: app/modules/restaurants/presentation/api/v1/restaurants.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for browsing restaurants, registering a restaurant, editing it,
# approving it (admins) and managing its menu.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router for the restaurant aggregate: public catalogue queries, owner profile and
# menu management with ownership checks in the service, and admin-only status moderation.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.restaurants.domain.services.restaurant_service
# - app.modules.restaurants.presentation.api.schemas.restaurant_schemas
# - app.shared.core.dependencies (authentication and role guards)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/restaurants)

"""
Restaurant API Endpoints

Endpoints:
- GET /: Catalogue of active restaurants (filters, pagination)
- POST /: Register the caller's restaurant
- GET /me: The caller's own restaurant
- GET /{restaurant_id}: Restaurant details with menu
- PUT /{restaurant_id}: Profile update (owner/admin)
- PUT /{restaurant_id}/status: Moderation (admin)
- POST /{restaurant_id}/menu: Add menu item
- PUT /{restaurant_id}/menu/{item_id}: Update menu item
- DELETE /{restaurant_id}/menu/{item_id}: Remove menu item
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.restaurants.domain.models.restaurant import RestaurantStatus
from app.modules.restaurants.domain.services.restaurant_service import RestaurantService
from app.modules.restaurants.presentation.api.schemas.restaurant_schemas import (
    MenuItemCreateRequest,
    MenuItemResponse,
    MenuItemUpdateRequest,
    RestaurantCreateRequest,
    RestaurantListResponse,
    RestaurantResponse,
    RestaurantStatusRequest,
    RestaurantUpdateRequest,
)
from app.shared.core.dependencies import (
    ROLE_RESTAURANT,
    CurrentUser,
    PaginationParams,
    get_current_admin_user,
    get_current_user,
    get_optional_current_user,
    get_pagination_params,
    require_role,
)
from app.shared.utils.helpers import total_pages

logger = logging.getLogger(__name__)

restaurants_router = APIRouter()


@restaurants_router.get(
    "",
    response_model=RestaurantListResponse,
    summary="List restaurants",
)
async def list_restaurants(
    cuisine: Optional[str] = Query(None, max_length=100),
    is_open: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    restaurant_status: Optional[RestaurantStatus] = Query(
        None, alias="status", description="Admins only; others always see active restaurants"
    ),
    pagination: PaginationParams = Depends(get_pagination_params),
    viewer: Optional[CurrentUser] = Depends(get_optional_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantListResponse:
    restaurants, total = await restaurant_service.list_restaurants(
        viewer=viewer,
        status=restaurant_status,
        cuisine=cuisine,
        is_open=is_open,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return RestaurantListResponse(
        items=[RestaurantResponse.from_domain(r) for r in restaurants],
        total=total,
        page=pagination.page,
        pages=total_pages(total, pagination.limit),
    )


@restaurants_router.post(
    "",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a restaurant",
    responses={
        400: {"description": "Invalid data or the caller already owns a restaurant"},
        403: {"description": "Caller is not a restaurant account"},
    }
)
async def create_restaurant(
    payload: RestaurantCreateRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_RESTAURANT)),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantResponse:
    restaurant = await restaurant_service.create_restaurant(
        owner_id=current_user.user_id,
        data=payload.model_dump(),
    )
    return RestaurantResponse.from_domain(restaurant)


@restaurants_router.get(
    "/me",
    response_model=RestaurantResponse,
    summary="Get the caller's restaurant",
)
async def get_my_restaurant(
    current_user: CurrentUser = Depends(require_role(ROLE_RESTAURANT)),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantResponse:
    restaurant = await restaurant_service.get_my_restaurant(current_user.user_id)
    return RestaurantResponse.from_domain(restaurant)


@restaurants_router.get(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    summary="Get restaurant details",
)
async def get_restaurant(
    restaurant_id: str,
    viewer: Optional[CurrentUser] = Depends(get_optional_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantResponse:
    restaurant = await restaurant_service.get_restaurant(restaurant_id, viewer)
    return RestaurantResponse.from_domain(restaurant)


@restaurants_router.put(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    summary="Update restaurant profile",
)
async def update_restaurant(
    restaurant_id: str,
    payload: RestaurantUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantResponse:
    restaurant = await restaurant_service.update_restaurant(
        current_user,
        restaurant_id,
        payload.model_dump(exclude_unset=True),
    )
    return RestaurantResponse.from_domain(restaurant)


@restaurants_router.put(
    "/{restaurant_id}/status",
    response_model=RestaurantResponse,
    summary="Change restaurant status (admin)",
)
async def update_restaurant_status(
    restaurant_id: str,
    payload: RestaurantStatusRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    restaurant_service: RestaurantService = Depends(),
) -> RestaurantResponse:
    restaurant = await restaurant_service.set_status(restaurant_id, payload.status)
    logger.info(f"Admin {admin.user_id} set restaurant {restaurant_id} to {payload.status.value}")
    return RestaurantResponse.from_domain(restaurant)


# =============================================================================
# MENU
# =============================================================================

@restaurants_router.post(
    "/{restaurant_id}/menu",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a menu item",
)
async def add_menu_item(
    restaurant_id: str,
    payload: MenuItemCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> MenuItemResponse:
    item = await restaurant_service.add_menu_item(current_user, restaurant_id, payload.model_dump())
    return MenuItemResponse.from_domain(item)


@restaurants_router.put(
    "/{restaurant_id}/menu/{item_id}",
    response_model=MenuItemResponse,
    summary="Update a menu item",
)
async def update_menu_item(
    restaurant_id: str,
    item_id: str,
    payload: MenuItemUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> MenuItemResponse:
    item = await restaurant_service.update_menu_item(
        current_user,
        restaurant_id,
        item_id,
        payload.model_dump(exclude_unset=True),
    )
    return MenuItemResponse.from_domain(item)


@restaurants_router.delete(
    "/{restaurant_id}/menu/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a menu item",
)
async def remove_menu_item(
    restaurant_id: str,
    item_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    restaurant_service: RestaurantService = Depends(),
) -> None:
    await restaurant_service.remove_menu_item(current_user, restaurant_id, item_id)
