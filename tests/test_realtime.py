"""Connection registry, event bus and realtime forwarding."""

from typing import Any, Dict, List

import pytest

from app.modules.delivery_partners.domain.events.partner_events import PartnerLocationUpdated
from app.modules.orders.application.handlers.event_handlers import RealtimeForwardingHandler
from app.modules.orders.domain.events.order_events import ORDER_STATUS_CHANGED, OrderStatusChanged
from app.shared.core.event_bus import DomainEvent, EventBus, EventHandler
from app.shared.infrastructure.realtime.connection_registry import (
    ConnectionRegistry,
    delivery_room,
    order_room,
)


class Inbox:
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    async def __call__(self, message: Dict[str, Any]) -> None:
        self.messages.append(message)


async def broken_sender(message: Dict[str, Any]) -> None:
    raise ConnectionError("socket closed")


class RecordingHandler(EventHandler):
    def __init__(self, types: List[str], fail: bool = False):
        self._types = types
        self.fail = fail
        self.seen: List[DomainEvent] = []

    @property
    def event_types(self) -> List[str]:
        return self._types

    async def handle(self, event: DomainEvent) -> None:
        self.seen.append(event)
        if self.fail:
            raise RuntimeError("handler failed")


class TestConnectionRegistry:
    async def test_publish_reaches_room_members_only(self):
        registry = ConnectionRegistry()
        alice, bob = Inbox(), Inbox()
        registry.register("a", alice)
        registry.register("b", bob)
        registry.join("a", order_room("o1"))

        delivered = await registry.publish(order_room("o1"), "orderStatusChanged", {"status": "ready"})

        assert delivered == 1
        assert alice.messages == [{"event": "orderStatusChanged", "room": "order:o1", "data": {"status": "ready"}}]
        assert bob.messages == []

    def test_join_requires_registration(self):
        with pytest.raises(KeyError):
            ConnectionRegistry().join("ghost", order_room("o1"))

    def test_deregister_leaves_every_room(self):
        registry = ConnectionRegistry()
        registry.register("a", Inbox())
        registry.join("a", order_room("o1"))
        registry.join("a", delivery_room("p1"))

        registry.deregister("a")

        assert registry.members(order_room("o1")) == set()
        assert registry.rooms_of("a") == set()
        assert registry.connection_count == 0

    def test_leave(self):
        registry = ConnectionRegistry()
        registry.register("a", Inbox())
        registry.join("a", order_room("o1"))
        registry.leave("a", order_room("o1"))

        assert registry.members(order_room("o1")) == set()

    async def test_failing_connection_is_dropped(self):
        registry = ConnectionRegistry()
        healthy = Inbox()
        registry.register("ok", healthy)
        registry.register("broken", broken_sender)
        registry.join("ok", order_room("o1"))
        registry.join("broken", order_room("o1"))

        delivered = await registry.publish(order_room("o1"), "orderStatusChanged", {})

        assert delivered == 1
        assert len(healthy.messages) == 1
        assert registry.connection_count == 1


class TestEventBus:
    async def test_publish_to_subscribers(self):
        bus = EventBus()
        handler = RecordingHandler([ORDER_STATUS_CHANGED])
        bus.subscribe(handler)

        event = DomainEvent(event_type=ORDER_STATUS_CHANGED, aggregate_id="o1")
        await bus.publish(event)
        await bus.publish(DomainEvent(event_type="other.event"))

        assert handler.seen == [event]
        assert bus.get_stats()["published"] == 2

    async def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        failing = RecordingHandler([ORDER_STATUS_CHANGED], fail=True)
        healthy = RecordingHandler([ORDER_STATUS_CHANGED])
        bus.subscribe(failing)
        bus.subscribe(healthy)

        await bus.publish(DomainEvent(event_type=ORDER_STATUS_CHANGED))

        assert len(healthy.seen) == 1
        assert bus.get_stats()["failed"] == 1

    async def test_unsubscribe(self):
        bus = EventBus()
        handler = RecordingHandler([ORDER_STATUS_CHANGED])
        bus.subscribe(handler)
        bus.unsubscribe(handler)

        await bus.publish(DomainEvent(event_type=ORDER_STATUS_CHANGED))

        assert handler.seen == []
        assert bus.get_subscriptions() == {}


class TestRealtimeForwarding:
    async def test_status_change_goes_to_order_room(self):
        registry = ConnectionRegistry()
        inbox = Inbox()
        registry.register("c", inbox)
        registry.join("c", order_room("o1"))

        event = OrderStatusChanged(
            aggregate_id="o1",
            payload={"order_id": "o1", "previous_status": "pending", "status": "confirmed"},
        )
        await RealtimeForwardingHandler(registry).handle(event)

        [message] = inbox.messages
        assert message["event"] == "orderStatusChanged"
        assert message["data"]["status"] == "confirmed"
        assert message["data"]["timestamp"] == event.timestamp.isoformat()

    async def test_location_goes_to_delivery_and_order_rooms(self):
        registry = ConnectionRegistry()
        rider_room, order_watchers = Inbox(), Inbox()
        registry.register("r", rider_room)
        registry.register("o", order_watchers)
        registry.join("r", delivery_room("p1"))
        registry.join("o", order_room("o1"))

        event = PartnerLocationUpdated.create("p1", [77.59, 12.97], order_id="o1", status="delivering")
        await RealtimeForwardingHandler(registry).handle(event)

        assert rider_room.messages[0]["event"] == "partnerLocationUpdated"
        assert order_watchers.messages[0]["data"]["coordinates"] == [77.59, 12.97]

    async def test_location_without_order_skips_order_rooms(self):
        registry = ConnectionRegistry()
        rider_room = Inbox()
        registry.register("r", rider_room)
        registry.join("r", delivery_room("p1"))

        await RealtimeForwardingHandler(registry).handle(PartnerLocationUpdated.create("p1", [1.0, 2.0]))

        assert len(rider_room.messages) == 1
