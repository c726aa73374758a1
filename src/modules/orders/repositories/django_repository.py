"""Django ORM implementation of the Order repository.

``save`` persists pending domain events to ``OutboxEvent`` inside the
caller's transaction and hands them to the in-process bus once that
transaction commits.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from functools import partial
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.accounts.models import UserRole
from modules.core.models import OutboxEvent
from modules.orders.dtos import OrderLine, ShippingDetailsDTO
from modules.orders.models import Order, OrderItem, OrderStatusHistory, order_total
from modules.orders.repositories.interfaces import IOrderRepository
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _orders(self):
        return Order.objects.select_related("consumer", "farmer").prefetch_related(
            "items", "status_history"
        )

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(
        self,
        consumer_id: Any,
        farmer_id: Any,
        lines: List[OrderLine],
        payment_method: str,
        shipping: ShippingDetailsDTO,
        notes: str = "",
    ) -> Order:
        order = Order(
            consumer_id=consumer_id,
            farmer_id=farmer_id,
            payment_method=payment_method,
            shipping_full_name=shipping.full_name,
            shipping_address=shipping.address,
            shipping_city=shipping.city,
            shipping_state=shipping.state,
            shipping_postal_code=shipping.postal_code,
            shipping_phone=shipping.phone_number,
            notes=notes,
            total_amount=order_total(lines),
        )
        order.save()

        OrderItem.objects.bulk_create(
            OrderItem(
                order=order,
                product_id=line.product_id,
                product_name=line.product_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.unit_price * line.quantity,
            )
            for line in lines
        )

        logger.info(
            "order.created",
            order_id=str(order.id),
            farmer_id=farmer_id,
            item_count=len(lines),
            total_amount=str(order.total_amount),
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        try:
            return self._orders().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self._orders()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def visible_to(self, user: Any):
        queryset = self._orders()
        if user.is_staff or user.role == UserRole.ADMIN:
            return queryset
        if user.is_farmer:
            return queryset.filter(farmer=user)
        return queryset.filter(consumer=user)

    def get_for_update(self, id: Any) -> Optional[Order]:
        try:
            return (
                Order.objects.select_for_update()
                .prefetch_related("items")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()

        events = entity.pull_domain_events()
        rows = [
            OutboxEvent.objects.create(
                event_name=event.event_name,
                aggregate_id=str(event.aggregate_id),
                payload=_serialize_event_payload(event),
                stream="orders",
            )
            for event in events
        ]
        if events:
            transaction.on_commit(partial(_publish_committed, list(zip(events, rows))))

        logger.info("order.saved", order_id=str(entity.id), event_count=len(events))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Orders are part of the financial record; only unplaced rows go."""
        deleted, _ = Order.objects.filter(id=id, items__isnull=True).delete()
        return deleted > 0

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def add_history(
        self,
        order: Order,
        new_status: str,
        user: Any = None,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order=order,
            old_status=old_status,
            new_status=new_status,
            user=user,
            notes=notes,
        )
        logger.info(
            "order.history_added",
            order_id=str(order.id),
            old_status=old_status,
            new_status=new_status,
        )
        return history


def _publish_committed(pairs: List[tuple[DomainEvent, OutboxEvent]]) -> None:
    for event, row in pairs:
        try:
            event_bus.publish(event)
        except Exception as exc:
            logger.exception("outbox.publish_failed", event_name=event.event_name)
            row.mark_failed(str(exc))
        else:
            row.mark_published()


def _serialize_event_payload(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(val) for key, val in value.items()}
    return value
