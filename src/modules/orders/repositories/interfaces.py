"""Order repository interface.

``save`` also writes the aggregate's pending domain events to the
transactional outbox.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.dtos import OrderLine, ShippingDetailsDTO
    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(
        self,
        consumer_id: Any,
        farmer_id: Any,
        lines: List["OrderLine"],
        payment_method: str,
        shipping: "ShippingDetailsDTO",
        notes: str = "",
    ) -> "Order":
        """Create one order with its snapshot items and frozen total."""

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional["Order"]:
        """Order with a row-level lock, items loaded."""

    @abstractmethod
    def visible_to(self, user: Any) -> "models.QuerySet[Order]":
        """Orders placed by a consumer, addressed to a farmer, or all for staff."""

    @abstractmethod
    def add_history(
        self,
        order: "Order",
        new_status: str,
        user: Any = None,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> "OrderStatusHistory":
        """Append a status change to the order's audit trail."""
