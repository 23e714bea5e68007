# 📄 File: app/modules/restaurants/infrastructure/database/restaurant_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving and loading of restaurants and their menus in the database,
# including catalogue search for customers.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of RestaurantRepository: domain/model mapping, filtered
# pagination, row locking for aggregate updates, optimistic version checks and
# menu item management through the owning relationship.
#
# 🔗 Dependencies:
# - app.modules.restaurants.domain.repositories.restaurant_repository (interface)
# - app.modules.restaurants.infrastructure.database.models
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - RestaurantService, order command handlers, admin dashboard
# - app.main (dependency override registration)

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.modules.restaurants.domain.models.restaurant import MenuItem, Restaurant, RestaurantStatus
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.modules.restaurants.infrastructure.database.models import MenuItemModel, RestaurantModel
from app.shared.core.exceptions import ConcurrencyConflictError, DuplicateResourceError, NotFoundError
from app.shared.core.geo import GeoPoint
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class RestaurantRepositoryImpl(RestaurantRepository):
    """
    SQLAlchemy implementation of the RestaurantRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, restaurant: Restaurant) -> Restaurant:
        model = self._domain_to_model(restaurant)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning(f"Restaurant creation failed - owner already has one: {restaurant.owner_id}")
            raise DuplicateResourceError(
                "You already own a restaurant",
                resource_type="restaurant",
                field="owner_id",
            ) from e

        logger.info(f"Created restaurant with ID: {model.id}")
        return self._model_to_domain(model)

    async def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        model = await self._session.get(RestaurantModel, restaurant_id)
        return self._model_to_domain(model) if model else None

    async def get_for_update(self, restaurant_id: str) -> Optional[Restaurant]:
        stmt = (
            select(RestaurantModel)
            .where(RestaurantModel.id == restaurant_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def get_by_owner(self, owner_id: str) -> Optional[Restaurant]:
        stmt = select(RestaurantModel).where(RestaurantModel.owner_id == owner_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def list(
        self,
        status: Optional[RestaurantStatus] = None,
        cuisine: Optional[str] = None,
        is_open: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Restaurant], int]:
        conditions = []
        if status is not None:
            conditions.append(RestaurantModel.status == status.value)
        if cuisine:
            conditions.append(func.lower(RestaurantModel.cuisine) == cuisine.lower())
        if is_open is not None:
            conditions.append(RestaurantModel.is_open == is_open)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(RestaurantModel.name).like(pattern),
                    func.lower(RestaurantModel.cuisine).like(pattern),
                    func.lower(RestaurantModel.description).like(pattern),
                )
            )

        count_stmt = select(func.count(RestaurantModel.id)).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(RestaurantModel)
            .where(*conditions)
            .order_by(RestaurantModel.rating.desc(), RestaurantModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()], total

    async def update(self, restaurant: Restaurant) -> Restaurant:
        model = await self._get_model(restaurant.id)

        model.name = restaurant.name
        model.description = restaurant.description
        model.cuisine = restaurant.cuisine
        model.address = restaurant.address.model_dump(mode="json") if restaurant.address else None
        model.longitude = restaurant.location.longitude if restaurant.location else None
        model.latitude = restaurant.location.latitude if restaurant.location else None
        model.contact_phone = restaurant.contact.phone
        model.contact_email = restaurant.contact.email
        model.images = list(restaurant.images)
        model.logo = restaurant.logo
        model.opening_hours = {day: hours.model_dump() for day, hours in restaurant.opening_hours.items()}
        model.status = restaurant.status.value
        model.is_open = restaurant.is_open
        model.minimum_order = restaurant.minimum_order
        model.delivery_fee = restaurant.delivery_fee
        model.commission = restaurant.commission
        model.rating = restaurant.rating
        model.total_ratings = restaurant.total_ratings
        model.total_orders = restaurant.total_orders
        model.total_revenue = restaurant.total_revenue
        model.total_earnings = restaurant.total_earnings
        model.average_preparation_time = restaurant.average_preparation_time
        model.updated_at = utcnow()

        await self._flush(restaurant.id)
        return self._model_to_domain(model)

    async def add_menu_item(self, restaurant_id: str, item: MenuItem) -> MenuItem:
        model = await self._get_model(restaurant_id)
        position = max((m.position for m in model.menu_items), default=-1) + 1

        item_model = MenuItemModel(
            id=item.id,
            position=position,
            name=item.name,
            description=item.description,
            price=item.price,
            category=item.category.value,
            image=item.image,
            is_available=item.is_available,
            preparation_time=item.preparation_time,
        )
        model.menu_items.append(item_model)
        await self._flush(restaurant_id)
        logger.info(f"Menu item {item.id} added to restaurant {restaurant_id}")
        return self._item_to_domain(item_model)

    async def update_menu_item(self, restaurant_id: str, item: MenuItem) -> MenuItem:
        item_model = await self._get_item_model(restaurant_id, item.id)

        item_model.name = item.name
        item_model.description = item.description
        item_model.price = item.price
        item_model.category = item.category.value
        item_model.image = item.image
        item_model.is_available = item.is_available
        item_model.preparation_time = item.preparation_time
        item_model.updated_at = utcnow()

        await self._flush(restaurant_id)
        return self._item_to_domain(item_model)

    async def remove_menu_item(self, restaurant_id: str, item_id: str) -> None:
        model = await self._get_model(restaurant_id)
        item_model = await self._get_item_model(restaurant_id, item_id)
        model.menu_items.remove(item_model)
        await self._flush(restaurant_id)
        logger.info(f"Menu item {item_id} removed from restaurant {restaurant_id}")

    async def count_by_status(self) -> Dict[str, int]:
        stmt = select(RestaurantModel.status, func.count(RestaurantModel.id)).group_by(
            RestaurantModel.status
        )
        result = await self._session.execute(stmt)
        return {status: count for status, count in result.all()}

    # =========================================================================
    # INTERNALS
    # =========================================================================

    async def _get_model(self, restaurant_id: str) -> RestaurantModel:
        model = await self._session.get(RestaurantModel, restaurant_id)
        if model is None:
            raise NotFoundError("Restaurant not found", resource_type="restaurant", resource_id=restaurant_id)
        return model

    async def _get_item_model(self, restaurant_id: str, item_id: str) -> MenuItemModel:
        stmt = select(MenuItemModel).where(
            MenuItemModel.id == item_id,
            MenuItemModel.restaurant_id == restaurant_id,
        )
        item_model = (await self._session.execute(stmt)).scalar_one_or_none()
        if item_model is None:
            raise NotFoundError("Menu item not found", resource_type="menu_item", resource_id=item_id)
        return item_model

    async def _flush(self, restaurant_id: str) -> None:
        try:
            await self._session.flush()
        except StaleDataError as e:
            logger.warning(f"Concurrent modification of restaurant {restaurant_id}")
            raise ConcurrencyConflictError(resource_type="restaurant", resource_id=restaurant_id) from e

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, restaurant: Restaurant) -> RestaurantModel:
        return RestaurantModel(
            id=restaurant.id,
            owner_id=restaurant.owner_id,
            name=restaurant.name,
            description=restaurant.description,
            cuisine=restaurant.cuisine,
            address=restaurant.address.model_dump(mode="json") if restaurant.address else None,
            longitude=restaurant.location.longitude if restaurant.location else None,
            latitude=restaurant.location.latitude if restaurant.location else None,
            contact_phone=restaurant.contact.phone,
            contact_email=restaurant.contact.email,
            images=list(restaurant.images),
            logo=restaurant.logo,
            opening_hours={day: hours.model_dump() for day, hours in restaurant.opening_hours.items()},
            status=restaurant.status.value,
            is_open=restaurant.is_open,
            minimum_order=restaurant.minimum_order,
            delivery_fee=restaurant.delivery_fee,
            commission=restaurant.commission,
            rating=restaurant.rating,
            total_ratings=restaurant.total_ratings,
            total_orders=restaurant.total_orders,
            total_revenue=restaurant.total_revenue,
            total_earnings=restaurant.total_earnings,
            average_preparation_time=restaurant.average_preparation_time,
            created_at=restaurant.created_at,
            updated_at=restaurant.updated_at,
            menu_items=[
                MenuItemModel(
                    id=item.id,
                    position=position,
                    name=item.name,
                    description=item.description,
                    price=item.price,
                    category=item.category.value,
                    image=item.image,
                    is_available=item.is_available,
                    preparation_time=item.preparation_time,
                )
                for position, item in enumerate(restaurant.menu)
            ],
        )

    def _model_to_domain(self, model: RestaurantModel) -> Restaurant:
        location = None
        if model.longitude is not None and model.latitude is not None:
            location = GeoPoint(coordinates=[model.longitude, model.latitude])

        return Restaurant(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            description=model.description,
            cuisine=model.cuisine,
            address=model.address,
            location=location,
            contact={"phone": model.contact_phone, "email": model.contact_email},
            images=model.images or [],
            logo=model.logo,
            opening_hours=model.opening_hours or {},
            menu=[self._item_to_domain(item) for item in model.menu_items],
            status=model.status,
            is_open=model.is_open,
            minimum_order=model.minimum_order,
            delivery_fee=model.delivery_fee,
            commission=model.commission if model.commission is not None else Decimal("10"),
            rating=model.rating or 0.0,
            total_ratings=model.total_ratings or 0,
            total_orders=model.total_orders or 0,
            total_revenue=model.total_revenue if model.total_revenue is not None else Decimal("0.00"),
            total_earnings=model.total_earnings if model.total_earnings is not None else Decimal("0.00"),
            average_preparation_time=model.average_preparation_time or 0.0,
            version=model.version,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    def _item_to_domain(self, model: MenuItemModel) -> MenuItem:
        return MenuItem(
            id=model.id,
            name=model.name,
            description=model.description,
            price=model.price,
            category=model.category,
            image=model.image,
            is_available=model.is_available,
            preparation_time=model.preparation_time,
        )
