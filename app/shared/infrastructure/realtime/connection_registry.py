# 📄 File: app/shared/infrastructure/realtime/connection_registry.py
#
# 🧭 Purpose (Layman Explanation):
# Keeps a guest list of everyone watching live updates (a customer following an order, a rider
# app) and which "rooms" they sit in, so a status change can be shouted to the right room.
#
# 🧪 Purpose (Technical Summary):
# Process-scoped connection directory: register on connect, deregister on disconnect,
# room membership (order:<id>, delivery:<id>) and a narrow async publish interface.
# Delivery is fire-and-forget: no acknowledgement, replay or cross-recipient ordering; a
# failing sender is dropped and logged, never raised into the publisher.
#
# 🔗 Dependencies:
# - asyncio-compatible send callables (FastAPI WebSocket.send_json)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.realtime (websocket endpoint)
# - app.modules.orders.application.handlers.event_handlers (domain event forwarding)

import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

Sender = Callable[[Dict[str, Any]], Awaitable[None]]

ORDER_ROOM_PREFIX = "order:"
DELIVERY_ROOM_PREFIX = "delivery:"


def order_room(order_id: str) -> str:
    return f"{ORDER_ROOM_PREFIX}{order_id}"


def delivery_room(delivery_partner_id: str) -> str:
    return f"{DELIVERY_ROOM_PREFIX}{delivery_partner_id}"


class ConnectionRegistry:
    """
    Directory of live connections and the rooms they joined.
    """

    def __init__(self):
        self._senders: Dict[str, Sender] = {}
        self._rooms: Dict[str, Set[str]] = defaultdict(set)
        self._memberships: Dict[str, Set[str]] = defaultdict(set)

    def register(self, connection_id: str, sender: Sender) -> None:
        """Register a connection and the coroutine used to push messages to it."""
        self._senders[connection_id] = sender
        logger.debug(f"Realtime connection registered: {connection_id}")

    def deregister(self, connection_id: str) -> None:
        """Forget a connection and remove it from every room."""
        self._senders.pop(connection_id, None)
        for room in self._memberships.pop(connection_id, set()):
            members = self._rooms.get(room)
            if members is not None:
                members.discard(connection_id)
                if not members:
                    del self._rooms[room]
        logger.debug(f"Realtime connection deregistered: {connection_id}")

    def join(self, connection_id: str, room: str) -> None:
        if connection_id not in self._senders:
            raise KeyError(f"Unknown connection: {connection_id}")
        self._rooms[room].add(connection_id)
        self._memberships[connection_id].add(room)

    def leave(self, connection_id: str, room: str) -> None:
        self._memberships.get(connection_id, set()).discard(room)
        members = self._rooms.get(room)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self._rooms[room]

    def members(self, room: str) -> Set[str]:
        return set(self._rooms.get(room, set()))

    def rooms_of(self, connection_id: str) -> Set[str]:
        return set(self._memberships.get(connection_id, set()))

    @property
    def connection_count(self) -> int:
        return len(self._senders)

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> int:
        """
        Push an event to every connection in a room.

        Args:
            room: Room name, e.g. ``order:<id>``
            event: Event name, e.g. ``orderStatusChanged``
            payload: JSON-serializable event body

        Returns:
            int: Number of connections the message was handed to
        """
        message = {"event": event, "room": room, "data": payload}
        delivered = 0

        for connection_id in self.members(room):
            sender = self._senders.get(connection_id)
            if sender is None:
                continue
            try:
                await sender(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping realtime connection {connection_id} after send failure: {e}")
                self.deregister(connection_id)

        logger.debug(f"Published {event} to {room} ({delivered} recipients)")
        return delivered


_registry: Optional[ConnectionRegistry] = None


def get_connection_registry() -> ConnectionRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _registry
    if _registry is None:
        _registry = ConnectionRegistry()
    return _registry


def reset_connection_registry() -> None:
    global _registry
    _registry = None
