"""Publish/subscribe contracts between aggregates and their side effects."""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

EventT = TypeVar("EventT", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[EventT]):
    """Reacts to one event type.  Exceptions propagate to the publisher."""

    def handle(self, event: EventT) -> None: ...


class IEventBus(Protocol):
    def subscribe(self, event_class: Type[EventT], handler: IEventHandler[EventT]) -> None:
        """Register ``handler``; subscribing the same handler twice is a no-op."""

    def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to the handlers of its exact class, in subscription order."""
