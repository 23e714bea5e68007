# 📄 File: app/api/v1/realtime.py
# 🧭 Purpose (Layman Explanation):
# The live channel: a customer's screen or a rider's app stays connected here and receives
# order updates and rider positions the moment they happen.
# 🧪 Purpose (Technical Summary):
# WebSocket endpoint ``/ws?token=<jwt>``. Authenticates with the same JWT as the REST API,
# registers the socket in the ConnectionRegistry and processes
# ``{"action": "join"|"leave", "room": "order:<id>"|"delivery:<id>"}`` messages, allowing a
# join only for rooms the user may view. Deregisters on disconnect.
# 🔗 Dependencies:
# FastAPI WebSocket, app.shared.core.security, connection registry, order/partner/user repos
# 🔄 Connected Modules / Calls From:
# app.api.v1.router; fed by RealtimeForwardingHandler via the EventBus

import logging
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.modules.delivery_partners.infrastructure.database.partner_repository_impl import (
    DeliveryPartnerRepositoryImpl,
)
from app.modules.orders.domain.services.access import OrderActorResolver, can_view_order
from app.modules.orders.infrastructure.database.order_repository_impl import OrderRepositoryImpl
from app.modules.restaurants.infrastructure.database.restaurant_repository_impl import RestaurantRepositoryImpl
from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthenticationError
from app.shared.core.security import verify_token
from app.shared.infrastructure.database.session import get_session
from app.shared.infrastructure.realtime.connection_registry import (
    DELIVERY_ROOM_PREFIX,
    ORDER_ROOM_PREFIX,
    get_connection_registry,
)

logger = logging.getLogger(__name__)

realtime_router = APIRouter()

JOIN = "join"
LEAVE = "leave"


async def authenticate_websocket(token: Optional[str]) -> Optional[CurrentUser]:
    if not token:
        return None
    try:
        payload = verify_token(token)
    except AuthenticationError:
        return None

    async with get_session() as session:
        user = await UserRepositoryImpl(session).get_by_id(payload["sub"])
    if user is None or not user.is_active:
        return None
    return CurrentUser(user_id=user.id, email=user.email, role=user.role.value, token_payload=payload)


async def can_join_room(user: CurrentUser, room: str) -> bool:
    """Order rooms follow the order view policy; delivery rooms belong to the partner and admins."""
    async with get_session() as session:
        restaurants = RestaurantRepositoryImpl(session)
        partners = DeliveryPartnerRepositoryImpl(session)
        actor = await OrderActorResolver(restaurants, partners).resolve(user)

        if room.startswith(ORDER_ROOM_PREFIX):
            order = await OrderRepositoryImpl(session).get_by_id(room[len(ORDER_ROOM_PREFIX):])
            return order is not None and can_view_order(actor, order)

        if room.startswith(DELIVERY_ROOM_PREFIX):
            partner_id = room[len(DELIVERY_ROOM_PREFIX):]
            return actor.is_admin or actor.partner_id == partner_id

    return False


def _parse_message(message: Any) -> Tuple[Optional[str], Optional[str]]:
    if not isinstance(message, dict):
        return None, None
    action = message.get("action")
    room = message.get("room")
    if action not in (JOIN, LEAVE) or not isinstance(room, str):
        return None, None
    return action, room


@realtime_router.websocket("/ws")
async def realtime_endpoint(websocket: WebSocket, token: Optional[str] = Query(None)):
    user = await authenticate_websocket(token)
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    registry = get_connection_registry()
    connection_id = str(uuid4())
    registry.register(connection_id, websocket.send_json)
    logger.info(f"Realtime connection {connection_id} opened by user {user.user_id}")

    try:
        while True:
            message = await websocket.receive_json()
            action, room = _parse_message(message)
            reply: Dict[str, Any]

            if action is None:
                reply = {"event": "error", "data": {"message": "Expected {action: join|leave, room}"}}
            elif action == LEAVE:
                registry.leave(connection_id, room)
                reply = {"event": "left", "room": room}
            elif await can_join_room(user, room):
                registry.join(connection_id, room)
                reply = {"event": "joined", "room": room}
            else:
                logger.info(f"User {user.user_id} denied access to room {room}")
                reply = {"event": "error", "room": room, "data": {"message": "Not authorized to join this room"}}

            await websocket.send_json(reply)
    except WebSocketDisconnect:
        logger.info(f"Realtime connection {connection_id} closed")
    except ValueError as e:
        logger.warning(f"Realtime connection {connection_id} sent invalid JSON: {e}")
        await websocket.close(code=status.WS_1003_UNSUPPORTED_DATA)
    finally:
        registry.deregister(connection_id)
