"""Django ORM implementation of the Product repository.

Look-ups return ``None`` for missing or malformed ids; the Service Layer
decides how to translate that.  ``reserve`` and ``release`` are the only
code paths that move stock for orders.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Case, F, Value, When

from modules.products.constants import ProductStatus
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.models import Product, ProductRating
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _status_after_taking(quantity: int) -> Case:
    """SQL rendition of ``availability_for`` over the post-update quantity.

    SET expressions see the pre-update row, so "remaining > 0" is
    "on hand > quantity taken".
    """
    return Case(
        When(quantity__gt=quantity, then=Value(ProductStatus.AVAILABLE)),
        default=Value(ProductStatus.SOLD_OUT),
    )


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def queryset(self):
        return Product.objects.alive().select_related("farmer")

    def get_by_id(self, id: str) -> Optional[Product]:
        try:
            return self.queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_many(self, ids: Iterable[Any]) -> Dict[Any, Product]:
        return {p.id: p for p in self.queryset().filter(id__in=list(ids))}

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def get_for_update(self, id: Any) -> Optional[Product]:
        try:
            return Product.objects.alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def update(self, entity: Product, fields: Iterable[str]) -> Product:
        entity.save(update_fields=list(fields))
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.soft_deleted", product_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Stock primitives
    # ------------------------------------------------------------------

    def reserve(self, id: Any, quantity: int) -> Product:
        updated = (
            Product.objects.alive()
            .filter(id=id, quantity__gte=quantity)
            .update(
                quantity=F("quantity") - quantity,
                total_sales=F("total_sales") + quantity,
                status=_status_after_taking(quantity),
            )
        )
        product = self.get_by_id(id)
        if product is None:
            raise ProductNotFound()
        if not updated:
            logger.warning(
                "catalog.insufficient_stock",
                product_id=str(id),
                available=product.quantity,
                requested=quantity,
            )
            raise InsufficientStock(product.name, product.quantity, quantity)
        logger.info(
            "catalog.stock_reserved",
            product_id=str(id),
            quantity=quantity,
            remaining=product.quantity,
        )
        return product

    def release(self, id: Any, quantity: int) -> Optional[Product]:
        updated = Product.objects.alive().filter(id=id).update(
            quantity=F("quantity") + quantity,
            total_sales=Case(
                When(total_sales__gte=quantity, then=F("total_sales") - quantity),
                default=Value(0),
            ),
            status=Value(ProductStatus.AVAILABLE),
        )
        if not updated:
            logger.warning("catalog.release_skipped", product_id=str(id), quantity=quantity)
            return None
        logger.info("catalog.stock_released", product_id=str(id), quantity=quantity)
        return self.get_by_id(id)

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------

    @transaction.atomic
    def upsert_rating(self, product: Product, user: Any, rating: int, review: str) -> ProductRating:
        record, _ = ProductRating.objects.update_or_create(
            product=product,
            user=user,
            defaults={"rating": rating, "review": review},
        )
        return record

    def ratings_of(self, product_id: Any) -> list[int]:
        return list(
            ProductRating.objects.filter(product_id=product_id).values_list("rating", flat=True)
        )
