# 📄 File: app/modules/orders/presentation/api/v1/orders.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for orders: customers place and rate them, restaurants and riders move
# them along and report positions, and everyone involved can look them up.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router for the order aggregate. Each endpoint builds a CQRS command or query and
# delegates to its handler; authorization beyond the role guard lives in the handlers.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.orders.application (commands, queries, handlers)
# - app.modules.orders.presentation.api.schemas.order_schemas
# - app.shared.core.dependencies (authentication and role guards)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/orders)

"""
Order API Endpoints

Endpoints:
- POST /: Place an order (customer)
- GET /: Role-scoped order list
- GET /{order_id}: Order details
- PUT /{order_id}/status: Status transition (restaurant/partner/admin)
- PUT /{order_id}/tracking: Append tracking entry (assigned partner)
- PUT /{order_id}/rating: Rate a delivered order (customer)
- PUT /{order_id}/assign: Assign a delivery partner
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.orders.application.commands import (
    AddTrackingCommand,
    AssignPartnerCommand,
    CreateOrderCommand,
    RateOrderCommand,
    UpdateOrderStatusCommand,
)
from app.modules.orders.application.handlers.command_handlers import (
    AddTrackingHandler,
    AssignPartnerHandler,
    CreateOrderHandler,
    RateOrderHandler,
    UpdateOrderStatusHandler,
)
from app.modules.orders.application.handlers.query_handlers import GetOrderHandler, ListOrdersHandler
from app.modules.orders.application.queries import GetOrderQuery, ListOrdersQuery
from app.modules.orders.domain.models.order import OrderStatus
from app.modules.orders.presentation.api.schemas.order_schemas import (
    AssignRequest,
    OrderCreateRequest,
    OrderListResponse,
    OrderResponse,
    OrderStatusRequest,
    RatingRequest,
    TrackingRequest,
)
from app.shared.core.dependencies import (
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_DELIVERY,
    ROLE_RESTAURANT,
    CurrentUser,
    PaginationParams,
    get_current_user,
    get_pagination_params,
    require_role,
)

logger = logging.getLogger(__name__)

orders_router = APIRouter()


@orders_router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    responses={
        400: {"description": "Invalid items, closed restaurant or amount below minimum"},
        404: {"description": "Restaurant or menu item not found"},
    }
)
async def create_order(
    payload: OrderCreateRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_CUSTOMER)),
    handler: CreateOrderHandler = Depends(),
) -> OrderResponse:
    command = CreateOrderCommand(customer_id=current_user.user_id, **payload.model_dump())
    order = await handler.handle(command)
    return OrderResponse.from_domain(order)


@orders_router.get(
    "",
    response_model=OrderListResponse,
    summary="List orders visible to the caller",
)
async def list_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: CurrentUser = Depends(get_current_user),
    handler: ListOrdersHandler = Depends(),
) -> OrderListResponse:
    query = ListOrdersQuery(status=order_status, page=pagination.page, limit=pagination.limit)
    result = await handler.handle(query, current_user)
    return OrderListResponse(
        items=[OrderResponse.from_domain(order) for order in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@orders_router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order details",
    responses={403: {"description": "Not involved in this order"}, 404: {"description": "Order not found"}},
)
async def get_order(
    order_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetOrderHandler = Depends(),
) -> OrderResponse:
    order = await handler.handle(GetOrderQuery(order_id=order_id), current_user)
    return OrderResponse.from_domain(order)


@orders_router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Change order status",
    responses={
        400: {"description": "Illegal transition or missing delivery partner"},
        403: {"description": "Not entitled to request this status"},
        409: {"description": "Concurrent modification"},
    }
)
async def update_order_status(
    order_id: str,
    payload: OrderStatusRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_RESTAURANT, ROLE_DELIVERY, ROLE_ADMIN)),
    handler: UpdateOrderStatusHandler = Depends(),
) -> OrderResponse:
    command = UpdateOrderStatusCommand(order_id=order_id, status=payload.status, reason=payload.reason)
    order = await handler.handle(command, current_user)
    return OrderResponse.from_domain(order)


@orders_router.put(
    "/{order_id}/tracking",
    response_model=OrderResponse,
    summary="Append a tracking entry",
    responses={403: {"description": "Caller is not the assigned delivery partner"}},
)
async def add_tracking(
    order_id: str,
    payload: TrackingRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: AddTrackingHandler = Depends(),
) -> OrderResponse:
    command = AddTrackingCommand(order_id=order_id, status=payload.status, location=payload.to_point())
    order = await handler.handle(command, current_user)
    return OrderResponse.from_domain(order)


@orders_router.put(
    "/{order_id}/rating",
    response_model=OrderResponse,
    summary="Rate a delivered order",
    responses={
        400: {"description": "Order not delivered or already rated"},
        403: {"description": "Caller did not place this order"},
    }
)
async def rate_order(
    order_id: str,
    payload: RatingRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: RateOrderHandler = Depends(),
) -> OrderResponse:
    command = RateOrderCommand(order_id=order_id, rating=payload.rating, review=payload.review)
    order = await handler.handle(command, current_user)
    return OrderResponse.from_domain(order)


@orders_router.put(
    "/{order_id}/assign",
    response_model=OrderResponse,
    summary="Assign a delivery partner",
    responses={400: {"description": "Order not assignable or partner unavailable"}},
)
async def assign_partner(
    order_id: str,
    payload: AssignRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_RESTAURANT, ROLE_DELIVERY, ROLE_ADMIN)),
    handler: AssignPartnerHandler = Depends(),
) -> OrderResponse:
    command = AssignPartnerCommand(order_id=order_id, delivery_partner_id=payload.delivery_partner_id)
    order = await handler.handle(command, current_user)
    return OrderResponse.from_domain(order)
