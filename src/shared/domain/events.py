"""Domain events and the collector mixin for aggregates.

Aggregates record events while a use case runs; the repository drains
them with ``pull_domain_events`` when it persists the aggregate, writing
one outbox row per event in the same transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID

import uuid6


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid6.uuid7)
    occurred_on: datetime = field(default_factory=_utcnow)

    @property
    def event_name(self) -> str:
        return type(self).__name__


class DomainEventMixin:
    """Pending events live on the instance, never on the database row."""

    def _pending_events(self) -> List[DomainEvent]:
        return self.__dict__.setdefault("_domain_events", [])

    def add_domain_event(self, event: DomainEvent) -> None:
        self._pending_events().append(event)

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._pending_events())

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return the pending events and forget them."""
        events = self.domain_events
        self._pending_events().clear()
        return events
