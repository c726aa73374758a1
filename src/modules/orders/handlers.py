"""Event handlers for Orders domain events.

Run on the in-process bus after the placing transaction commits.
"""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from shared.domain.bus import IEventBus, IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.farmer_notified",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            farmer_id=event.farmer_id,
            total_amount=str(event.total_amount),
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.consumer_notified",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info(
            "order.cancellation_recorded",
            order_id=str(event.aggregate_id),
            reason=event.reason,
        )


order_placed_handler = OrderPlacedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
order_cancelled_handler = OrderCancelledHandler()


def subscribe_order_handlers(bus: IEventBus) -> None:
    bus.subscribe(OrderPlaced, order_placed_handler)
    bus.subscribe(OrderStatusChanged, order_status_changed_handler)
    bus.subscribe(OrderCancelled, order_cancelled_handler)
