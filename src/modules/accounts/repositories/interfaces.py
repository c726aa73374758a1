"""Farmer repository interface.

Beyond the generic contract the farmer dashboard needs read-only
aggregates over the farmer's products and orders.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IFarmerRepository(IRepository["User"]):
    @abstractmethod
    def within_box(
        self, min_lat: float, max_lat: float, min_lng: float, max_lng: float
    ) -> List[User]:
        """Farmers whose farm coordinates fall inside the bounding box."""

    @abstractmethod
    def count_products(self, farmer_id: Any) -> int: ...

    @abstractmethod
    def count_orders(self, farmer_id: Any) -> int: ...

    @abstractmethod
    def delivered_revenue(self, farmer_id: Any) -> Decimal: ...

    @abstractmethod
    def product_performance(self, farmer_id: Any) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def recent_orders(self, farmer_id: Any, limit: int = 5) -> List[Any]: ...

    @abstractmethod
    def monthly_sales(self, farmer_id: Any) -> List[Dict[str, Any]]: ...
