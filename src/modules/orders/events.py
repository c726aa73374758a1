"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderPlaced(DomainEvent):
    order_number: str
    consumer_id: int
    farmer_id: int
    total_amount: Decimal


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    old_status: str
    new_status: str
    actor_id: int


@dataclass(frozen=True, kw_only=True)
class OrderCancelled(DomainEvent):
    reason: str
    actor_id: int
