"""Django ORM implementation of the Farmer repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Sum
from django.db.models.functions import ExtractMonth, ExtractYear

from modules.accounts.models import User, UserRole
from modules.accounts.repositories.interfaces import IFarmerRepository
from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.products.models import Product

logger = structlog.get_logger(__name__)


class FarmerDjangoRepository(IFarmerRepository):
    """Farmers are ``User`` rows with ``role=farmer``."""

    def _farmers(self):
        return User.objects.filter(role=UserRole.FARMER, is_active=True)

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return self._farmers().filter(pk=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        queryset = self._farmers()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        logger.info("farmer.saved", farmer_id=entity.pk)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Deactivate the account; orders keep pointing at it."""
        updated = self._farmers().filter(pk=id).update(is_active=False)
        return updated > 0

    def within_box(
        self, min_lat: float, max_lat: float, min_lng: float, max_lng: float
    ) -> List[User]:
        return list(
            self._farmers().filter(
                farm_latitude__isnull=False,
                farm_longitude__isnull=False,
                farm_latitude__gte=min_lat,
                farm_latitude__lte=max_lat,
                farm_longitude__gte=min_lng,
                farm_longitude__lte=max_lng,
            )
        )

    # ------------------------------------------------------------------
    # Dashboard aggregates
    # ------------------------------------------------------------------

    def count_products(self, farmer_id: Any) -> int:
        return Product.objects.alive().filter(farmer_id=farmer_id).count()

    def count_orders(self, farmer_id: Any) -> int:
        return Order.objects.filter(farmer_id=farmer_id).count()

    def delivered_revenue(self, farmer_id: Any) -> Decimal:
        total = Order.objects.filter(
            farmer_id=farmer_id, status=OrderStatus.DELIVERED
        ).aggregate(total=Sum("total_amount"))["total"]
        return total or Decimal("0.00")

    def product_performance(self, farmer_id: Any) -> List[Dict[str, Any]]:
        return list(
            Product.objects.alive()
            .filter(farmer_id=farmer_id)
            .order_by("-total_sales", "name")
            .values("id", "name", "total_sales")
        )

    def recent_orders(self, farmer_id: Any, limit: int = 5) -> List[Order]:
        return list(
            Order.objects.filter(farmer_id=farmer_id)
            .select_related("consumer")
            .prefetch_related("items")
            .order_by("-created_at")[:limit]
        )

    def monthly_sales(self, farmer_id: Any) -> List[Dict[str, Any]]:
        rows = (
            Order.objects.filter(farmer_id=farmer_id, status=OrderStatus.DELIVERED)
            .annotate(year=ExtractYear("created_at"), month=ExtractMonth("created_at"))
            .values("year", "month")
            .annotate(total_sales=Sum("total_amount"), order_count=Count("id"))
            .order_by("-year", "-month")
        )
        return [
            {
                "year": row["year"],
                "month": row["month"],
                "totalSales": row["total_sales"],
                "orderCount": row["order_count"],
            }
            for row in rows
        ]
