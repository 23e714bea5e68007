# 📄 File: app/modules/orders/infrastructure/database/order_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving and loading of orders, their dishes and their tracking points
# in the database, and adds up revenue for the admin dashboard.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of OrderRepository: aggregate mapping across three tables,
# SELECT ... FOR UPDATE loads for every mutation, optimistic version checks, append-only
# tracking inserts and role-scoped pagination.
#
# 🔗 Dependencies:
# - app.modules.orders.domain.repositories.order_repository (interface)
# - app.modules.orders.infrastructure.database.models
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - order command/query handlers, PaymentService, admin dashboard
# - app.main (dependency override registration)

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.modules.orders.domain.models.order import Order, OrderStatus, TrackingEntry
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.orders.infrastructure.database.models import (
    OrderItemModel,
    OrderModel,
    OrderTrackingModel,
)
from app.shared.core.exceptions import ConcurrencyConflictError, NotFoundError
from app.shared.core.geo import GeoPoint
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import ensure_utc, round_money, utcnow

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
UNBILLED_STATUSES = (OrderStatus.CANCELLED.value, OrderStatus.REJECTED.value)


class OrderRepositoryImpl(OrderRepository):
    """
    SQLAlchemy implementation of the OrderRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, order: Order) -> Order:
        model = self._domain_to_model(order)
        self._session.add(model)
        await self._session.flush()
        logger.info(f"Created order {model.order_number} ({model.id})")
        return self._model_to_domain(model)

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        model = await self._session.get(OrderModel, order_id)
        return self._model_to_domain(model) if model else None

    async def get_for_update(self, order_id: str) -> Optional[Order]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def get_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.gateway_order_id == gateway_order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def list(
        self,
        customer_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        delivery_partner_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Order], int]:
        conditions = []
        if customer_id is not None:
            conditions.append(OrderModel.customer_id == customer_id)
        if restaurant_id is not None:
            conditions.append(OrderModel.restaurant_id == restaurant_id)
        if delivery_partner_id is not None:
            conditions.append(OrderModel.delivery_partner_id == delivery_partner_id)
        if status is not None:
            conditions.append(OrderModel.status == status.value)

        count_stmt = select(func.count(OrderModel.id)).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(OrderModel)
            .where(*conditions)
            .order_by(OrderModel.created_at.desc(), OrderModel.order_number.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()], total

    async def update(self, order: Order) -> Order:
        model = await self._get_model(order.id)

        model.delivery_partner_id = order.delivery_partner_id
        model.status = order.status.value
        model.payment_status = order.payment_status.value
        model.gateway_order_id = order.payment_details.gateway_order_id
        model.payment_transaction_id = order.payment_details.transaction_id
        model.payment_signature = order.payment_details.signature
        model.transfer_id = order.payment_details.transfer_id
        model.transfer_account_id = order.payment_details.transfer_account_id
        model.estimated_delivery_time = order.estimated_delivery_time
        model.actual_delivery_time = order.actual_delivery_time
        model.delivery_time = order.delivery_time
        model.cancellation_reason = order.cancellation_reason
        model.rating = order.rating
        model.review = order.review
        model.rated_at = order.rated_at
        model.commission = order.commission
        model.delivery_partner_earnings = order.delivery_partner_earnings
        model.restaurant_earnings = order.restaurant_earnings
        model.platform_earnings = order.platform_earnings
        model.settled_at = order.settled_at
        model.updated_at = utcnow()

        await self._flush(order.id)
        return self._model_to_domain(model)

    async def append_tracking(self, order_id: str, entry: TrackingEntry) -> TrackingEntry:
        model = await self._get_model(order_id)
        tracking_model = OrderTrackingModel(
            sequence=entry.sequence,
            status=entry.status.value,
            longitude=entry.location.longitude,
            latitude=entry.location.latitude,
            timestamp=entry.timestamp,
        )
        model.tracking.append(tracking_model)
        model.updated_at = utcnow()

        await self._flush(order_id)
        return self._tracking_to_domain(tracking_model)

    async def count_by_status(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Dict[str, int]:
        stmt = (
            select(OrderModel.status, func.count(OrderModel.id))
            .where(*self._period(created_from, created_to))
            .group_by(OrderModel.status)
        )
        result = await self._session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def delivered_revenue(self) -> Dict[str, Decimal]:
        stmt = select(
            func.coalesce(func.sum(OrderModel.total), 0),
            func.coalesce(func.sum(OrderModel.platform_earnings), 0),
            func.coalesce(func.sum(OrderModel.restaurant_earnings), 0),
            func.coalesce(func.sum(OrderModel.delivery_partner_earnings), 0),
        ).where(OrderModel.status == OrderStatus.DELIVERED.value)
        gross, platform, restaurant, partner = (await self._session.execute(stmt)).one()
        return {
            "gross_revenue": Decimal(str(gross)),
            "platform_earnings": Decimal(str(platform)),
            "restaurant_earnings": Decimal(str(restaurant)),
            "delivery_partner_earnings": Decimal(str(partner)),
        }

    async def revenue_report(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        period = self._period(created_from, created_to)
        total_orders = (
            await self._session.execute(select(func.count(OrderModel.id)).where(*period))
        ).scalar_one()

        stmt = select(
            func.count(OrderModel.id),
            func.coalesce(func.sum(OrderModel.total), 0),
            func.coalesce(func.sum(OrderModel.platform_earnings), 0),
            func.coalesce(func.sum(OrderModel.restaurant_earnings), 0),
            func.coalesce(func.sum(OrderModel.delivery_partner_earnings), 0),
        ).where(*period, OrderModel.status.notin_(UNBILLED_STATUSES))
        billed, revenue, platform, restaurant, partner = (await self._session.execute(stmt)).one()

        revenue = Decimal(str(revenue))
        return {
            "total_orders": total_orders,
            "billed_orders": billed,
            "total_revenue": revenue,
            "average_order_value": round_money(revenue / billed) if billed else ZERO,
            "platform_earnings": Decimal(str(platform)),
            "restaurant_earnings": Decimal(str(restaurant)),
            "delivery_partner_earnings": Decimal(str(partner)),
        }

    async def top_restaurants(
        self,
        limit: int = 5,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        revenue = func.sum(OrderModel.total)
        stmt = (
            select(
                OrderModel.restaurant_id,
                func.count(OrderModel.id),
                revenue,
                func.avg(OrderModel.rating),
            )
            .where(*self._period(created_from, created_to), OrderModel.status.notin_(UNBILLED_STATUSES))
            .group_by(OrderModel.restaurant_id)
            .order_by(revenue.desc(), OrderModel.restaurant_id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            {
                "restaurant_id": restaurant_id,
                "total_orders": count,
                "total_revenue": Decimal(str(total)),
                "average_rating": float(rating) if rating is not None else None,
            }
            for restaurant_id, count, total, rating in result.all()
        ]

    async def top_delivery_partners(
        self,
        limit: int = 5,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        deliveries = func.count(OrderModel.id)
        stmt = (
            select(
                OrderModel.delivery_partner_id,
                deliveries,
                func.sum(OrderModel.delivery_partner_earnings),
                func.avg(OrderModel.rating),
            )
            .where(
                *self._period(created_from, created_to),
                OrderModel.status == OrderStatus.DELIVERED.value,
                OrderModel.delivery_partner_id.isnot(None),
            )
            .group_by(OrderModel.delivery_partner_id)
            .order_by(deliveries.desc(), OrderModel.delivery_partner_id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            {
                "delivery_partner_id": partner_id,
                "total_deliveries": count,
                "total_earnings": Decimal(str(earnings or 0)),
                "average_rating": float(rating) if rating is not None else None,
            }
            for partner_id, count, earnings, rating in result.all()
        ]

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @staticmethod
    def _period(created_from: Optional[datetime], created_to: Optional[datetime]) -> List[Any]:
        conditions = []
        if created_from is not None:
            conditions.append(OrderModel.created_at >= created_from)
        if created_to is not None:
            conditions.append(OrderModel.created_at <= created_to)
        return conditions

    async def _get_model(self, order_id: str) -> OrderModel:
        model = await self._session.get(OrderModel, order_id)
        if model is None:
            raise NotFoundError("Order not found", resource_type="order", resource_id=order_id)
        return model

    async def _flush(self, order_id: str) -> None:
        try:
            await self._session.flush()
        except StaleDataError as e:
            logger.warning(f"Concurrent modification of order {order_id}")
            raise ConcurrencyConflictError(resource_type="order", resource_id=order_id) from e

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, order: Order) -> OrderModel:
        return OrderModel(
            id=order.id,
            order_number=order.order_number,
            customer_id=order.customer_id,
            restaurant_id=order.restaurant_id,
            delivery_partner_id=order.delivery_partner_id,
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            tax=order.tax,
            total=order.total,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method.value,
            gateway_order_id=order.payment_details.gateway_order_id,
            payment_transaction_id=order.payment_details.transaction_id,
            payment_signature=order.payment_details.signature,
            delivery_address=order.delivery_address.model_dump(mode="json"),
            notes=order.notes,
            estimated_delivery_time=order.estimated_delivery_time,
            delivery_partner_earnings=order.delivery_partner_earnings,
            restaurant_earnings=order.restaurant_earnings,
            platform_earnings=order.platform_earnings,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemModel(
                    position=position,
                    menu_item_id=item.menu_item_id,
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                    special_instructions=item.special_instructions,
                )
                for position, item in enumerate(order.items)
            ],
            tracking=[],
        )

    def _model_to_domain(self, model: OrderModel) -> Order:
        return Order(
            id=model.id,
            order_number=model.order_number,
            customer_id=model.customer_id,
            restaurant_id=model.restaurant_id,
            delivery_partner_id=model.delivery_partner_id,
            items=[
                {
                    "menu_item_id": item.menu_item_id,
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": item.price,
                    "special_instructions": item.special_instructions,
                }
                for item in model.items
            ],
            subtotal=model.subtotal,
            delivery_fee=model.delivery_fee,
            tax=model.tax,
            total=model.total,
            status=model.status,
            payment_status=model.payment_status,
            payment_method=model.payment_method,
            payment_details={
                "gateway_order_id": model.gateway_order_id,
                "transaction_id": model.payment_transaction_id,
                "signature": model.payment_signature,
                "transfer_id": model.transfer_id,
                "transfer_account_id": model.transfer_account_id,
            },
            delivery_address=model.delivery_address,
            notes=model.notes,
            estimated_delivery_time=ensure_utc(model.estimated_delivery_time),
            actual_delivery_time=ensure_utc(model.actual_delivery_time),
            delivery_time=model.delivery_time,
            cancellation_reason=model.cancellation_reason,
            rating=model.rating,
            review=model.review,
            rated_at=ensure_utc(model.rated_at),
            commission=model.commission,
            delivery_partner_earnings=model.delivery_partner_earnings if model.delivery_partner_earnings is not None else ZERO,
            restaurant_earnings=model.restaurant_earnings if model.restaurant_earnings is not None else ZERO,
            platform_earnings=model.platform_earnings if model.platform_earnings is not None else ZERO,
            settled_at=ensure_utc(model.settled_at),
            tracking=[self._tracking_to_domain(entry) for entry in model.tracking],
            version=model.version,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    def _tracking_to_domain(self, model: OrderTrackingModel) -> TrackingEntry:
        return TrackingEntry(
            sequence=model.sequence,
            status=model.status,
            location=GeoPoint(coordinates=[model.longitude, model.latitude]),
            timestamp=ensure_utc(model.timestamp),
        )
