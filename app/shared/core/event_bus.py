"""
Event bus system for the food delivery marketplace.
Enables decoupled communication between modules through domain events.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """
    Base class for all domain events.
    Events represent something that happened in the domain.
    """
    aggregate_id: str = ""
    aggregate_type: str = ""
    user_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    event_type: str = "domain.event"
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class EventHandler(ABC):
    """
    Abstract base class for event handlers.
    Each handler processes specific types of domain events.
    """

    @property
    @abstractmethod
    def event_types(self) -> List[str]:
        """Event types this handler processes."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle the domain event."""

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the event."""
        return event.event_type in self.event_types


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.
    """

    def __init__(self):
        self.subscriptions: Dict[str, List[EventHandler]] = {}
        self._stats = {
            "published": 0,
            "processed": 0,
            "failed": 0,
        }

    def subscribe(self, handler: EventHandler, event_type: Optional[str] = None) -> None:
        """
        Subscribe handler to one event type, or to every type it declares.

        Args:
            handler: Event handler instance
            event_type: Event type to subscribe to (uses handler.event_types if None)
        """
        event_types = [event_type] if event_type else handler.event_types
        for name in event_types:
            self.subscriptions.setdefault(name, []).append(handler)
            logger.info(f"Handler {handler.__class__.__name__} subscribed to {name}")

    def unsubscribe(self, handler: EventHandler, event_type: Optional[str] = None) -> None:
        """Unsubscribe handler from one event type or from all of its types."""
        event_types = [event_type] if event_type else list(self.subscriptions)
        for name in event_types:
            remaining = [h for h in self.subscriptions.get(name, []) if h is not handler]
            if remaining:
                self.subscriptions[name] = remaining
            else:
                self.subscriptions.pop(name, None)

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish event to every subscribed handler.

        Handler exceptions are logged and swallowed: the publisher's
        business operation has already succeeded.

        Args:
            event: Domain event to publish
        """
        self._stats["published"] += 1
        handlers = self.subscriptions.get(event.event_type, [])

        if not handlers:
            logger.debug(f"No handlers for event type: {event.event_type}")
            return

        for handler in handlers:
            try:
                await handler.handle(event)
                self._stats["processed"] += 1
            except Exception as e:
                self._stats["failed"] += 1
                logger.error(
                    f"Handler {handler.__class__.__name__} failed for event "
                    f"{event.event_type} ({event.event_id}): {e}",
                    exc_info=True,
                )

    def get_subscriptions(self) -> Dict[str, List[str]]:
        """Get all current subscriptions."""
        return {
            event_type: [h.__class__.__name__ for h in handlers]
            for event_type, handlers in self.subscriptions.items()
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get event bus statistics."""
        return {
            **self._stats,
            "subscription_count": sum(len(h) for h in self.subscriptions.values()),
            "event_types": list(self.subscriptions.keys()),
        }


# =============================================================================
# GLOBAL EVENT BUS
# =============================================================================

_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Get the process-wide event bus, creating it on first use."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Drop the process-wide event bus (application shutdown and tests)."""
    global _event_bus
    _event_bus = None
