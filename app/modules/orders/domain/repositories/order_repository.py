# 📄 File: app/modules/orders/domain/repositories/order_repository.py
# 🧭 Purpose (Layman Explanation):
# The list of things the app can ask the order storage to do: save an order, find it,
# lock it while changing it, add tracking points and list orders for each kind of user.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Order aggregate: creation with items, row-locking loads
# for every mutation, append-only tracking, role-scoped listing and dashboard and report aggregates.
# 🔗 Dependencies:
# Domain models (Order, TrackingEntry), typing, abc
# 🔄 Connected Modules / Calls From:
# order command/query handlers, PaymentService, admin dashboard

from abc import ABC, abstractmethod
from decimal import Decimal
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..models.order import Order, OrderStatus, TrackingEntry


class OrderRepository(ABC):
    """
    Repository interface for Order aggregate data access.

    Orders are never deleted; items are immutable after creation and
    tracking entries are append-only.
    """

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Persist a new order with its items."""

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order (items and tracking included) by ID."""

    @abstractmethod
    async def get_for_update(self, order_id: str) -> Optional[Order]:
        """Get order by ID, locking its row for the rest of the transaction."""

    @abstractmethod
    async def get_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        """Get (and lock) the order a payment gateway order belongs to."""

    @abstractmethod
    async def list(
        self,
        customer_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        delivery_partner_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Order], int]:
        """List orders newest first, returning the page and total count."""

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """
        Persist status, payment, assignment, rating and settlement fields.

        Raises:
            ConcurrencyConflictError: If the order was modified concurrently
        """

    @abstractmethod
    async def append_tracking(self, order_id: str, entry: TrackingEntry) -> TrackingEntry:
        """Append an entry to the order's tracking log."""

    @abstractmethod
    async def count_by_status(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Dict[str, int]:
        """Number of orders per status, optionally limited to a creation window."""

    @abstractmethod
    async def delivered_revenue(self) -> Dict[str, Decimal]:
        """Gross total and earnings shares summed over delivered orders."""

    @abstractmethod
    async def revenue_report(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Order count plus revenue, average order value and earnings shares.

        Revenue figures leave out cancelled and rejected orders.
        """

    @abstractmethod
    async def top_restaurants(
        self,
        limit: int = 5,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Restaurants with the highest revenue: id, order count, revenue and mean rating."""

    @abstractmethod
    async def top_delivery_partners(
        self,
        limit: int = 5,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Partners with the most deliveries: id, delivery count, earnings and mean rating."""
