"""Order status graph and order numbers."""

from datetime import datetime, timedelta, timezone

import pytest

from app.modules.orders.domain.models.order import OrderStatus
from app.modules.orders.domain.services.lifecycle import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    can_transition,
    delivery_minutes,
    ensure_transition,
    is_terminal,
)
from app.modules.orders.domain.services.order_number import ORDER_NUMBER_PATTERN, generate_order_number
from app.shared.core.exceptions import InvalidStateError

HAPPY_PATH = [
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.PICKED_UP,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
]


def test_happy_path_is_legal():
    for current, target in zip(HAPPY_PATH, HAPPY_PATH[1:]):
        ensure_transition(current, target)


def test_every_status_has_an_entry():
    assert set(ALLOWED_TRANSITIONS) == set(OrderStatus)


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REJECTED}
    for status in TERMINAL_STATUSES:
        assert is_terminal(status)
        for target in OrderStatus:
            assert not can_transition(status, target)


@pytest.mark.parametrize("status", list(OrderStatus))
def test_same_status_is_rejected(status):
    with pytest.raises(InvalidStateError):
        ensure_transition(status, status)


def test_cannot_skip_ahead():
    assert not can_transition(OrderStatus.PENDING, OrderStatus.DELIVERED)
    assert not can_transition(OrderStatus.CONFIRMED, OrderStatus.READY)


def test_cannot_go_backwards():
    assert not can_transition(OrderStatus.READY, OrderStatus.PREPARING)


def test_cancellation_window_closes_at_pickup():
    for status in (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY):
        assert can_transition(status, OrderStatus.CANCELLED)
    for status in (OrderStatus.PICKED_UP, OrderStatus.DELIVERING):
        assert not can_transition(status, OrderStatus.CANCELLED)


def test_rejection_only_before_preparation():
    assert can_transition(OrderStatus.PENDING, OrderStatus.REJECTED)
    assert can_transition(OrderStatus.CONFIRMED, OrderStatus.REJECTED)
    assert not can_transition(OrderStatus.PREPARING, OrderStatus.REJECTED)


def test_illegal_transition_message():
    with pytest.raises(InvalidStateError) as exc_info:
        ensure_transition(OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    assert exc_info.value.message == "Cannot change order status from delivered to cancelled"


def test_delivery_minutes():
    placed = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert delivery_minutes(placed, placed + timedelta(minutes=31, seconds=30)) == 31.5


def test_order_number_format():
    now = datetime(2024, 3, 9, tzinfo=timezone.utc)
    number = generate_order_number(now)

    assert number.startswith("ORD240309-")
    assert ORDER_NUMBER_PATTERN.match(number)


def test_order_numbers_do_not_repeat():
    now = datetime(2024, 3, 9, tzinfo=timezone.utc)
    numbers = {generate_order_number(now) for _ in range(10_000)}

    assert len(numbers) == 10_000
