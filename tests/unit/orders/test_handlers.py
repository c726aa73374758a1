"""Unit tests for Orders event handlers and the in-memory bus."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from modules.orders.handlers import (
    OrderCancelledHandler,
    OrderPlacedHandler,
    OrderStatusChangedHandler,
    subscribe_order_handlers,
)
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


def _placed() -> OrderPlaced:
    return OrderPlaced(
        aggregate_id=uuid4(),
        order_number="ORD-20261019-ABC123",
        consumer_id=1,
        farmer_id=2,
        total_amount=Decimal("25.00"),
    )


def test_order_placed_handler_logs(caplog):
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderPlacedHandler().handle(_placed())

    assert any("order.farmer_notified" in record.getMessage() for record in caplog.records)


def test_order_status_changed_handler_logs(caplog):
    event = OrderStatusChanged(
        aggregate_id=uuid4(), old_status="pending", new_status="confirmed", actor_id=2
    )

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderStatusChangedHandler().handle(event)

    assert any("order.consumer_notified" in record.getMessage() for record in caplog.records)


def test_order_cancelled_handler_logs(caplog):
    event = OrderCancelled(aggregate_id=uuid4(), reason="Hail storm", actor_id=2)

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderCancelledHandler().handle(event)

    assert any("order.cancellation_recorded" in record.getMessage() for record in caplog.records)


def test_in_memory_event_bus_routes_events():
    bus = InMemoryEventBus()
    handled = []

    class CapturingHandler:
        def handle(self, event) -> None:
            handled.append(event)

    handler = CapturingHandler()
    event = _placed()

    bus.subscribe(OrderPlaced, handler)
    bus.subscribe(OrderPlaced, handler)
    bus.publish(event)
    bus.publish(OrderCancelled(aggregate_id=uuid4(), reason="x", actor_id=1))

    assert handled == [event]


def test_subscribe_order_handlers_wires_every_event(caplog):
    bus = InMemoryEventBus()
    subscribe_order_handlers(bus)
    subscribe_order_handlers(bus)

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        bus.publish(_placed())
        bus.publish(OrderCancelled(aggregate_id=uuid4(), reason="Hail storm", actor_id=2))

    messages = [record.getMessage() for record in caplog.records]
    assert sum("order.farmer_notified" in m for m in messages) == 1
    assert sum("order.cancellation_recorded" in m for m in messages) == 1
