"""Product and ProductRating models.

Rules implemented here:
- Price is non-negative; on-hand ``quantity`` never goes negative
  (``PositiveIntegerField`` + check constraint).
- ``status`` is derived from ``quantity`` by ``availability_for`` on every
  save; the bulk ``reserve`` / ``release`` updates in the repository apply
  the same rule inside their single UPDATE statement.
- ``average_rating`` is recomputed by ``average_rating_of`` after a rating
  is written, never implicitly.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel
from modules.products.constants import (
    MAX_RATING,
    MIN_RATING,
    ProductCategory,
    ProductStatus,
    ProductUnit,
)

logger = structlog.get_logger(__name__)


def availability_for(quantity: int) -> str:
    """``available`` iff there is stock on hand."""
    return ProductStatus.AVAILABLE if quantity > 0 else ProductStatus.SOLD_OUT


def average_rating_of(ratings: Iterable[int]) -> Decimal:
    values = list(ratings)
    if not values:
        return Decimal("0.00")
    mean = Decimal(sum(values)) / Decimal(len(values))
    return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class Product(SoftDeleteModel):
    """A farmer's listing with mutable on-hand quantity."""

    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="products",
    )
    name = models.CharField(max_length=255)
    description = models.TextField()
    category = models.CharField(max_length=20, choices=ProductCategory.choices)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    unit = models.CharField(max_length=10, choices=ProductUnit.choices)
    quantity = models.PositiveIntegerField(default=0)
    harvest_date = models.DateField()
    expiry_date = models.DateField(null=True, blank=True)
    organic = models.BooleanField(default=False)
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.AVAILABLE,
    )
    average_rating = models.DecimalField(
        max_digits=3, decimal_places=2, default=Decimal("0.00")
    )
    total_sales = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="products_status_idx"),
            models.Index(fields=["category"], name="products_category_idx"),
            models.Index(fields=["farmer", "-created_at"], name="products_farmer_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                check=models.Q(quantity__gte=0),
                name="products_quantity_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})
        if self.expiry_date and self.harvest_date and self.expiry_date < self.harvest_date:
            raise ValidationError({"expiry_date": "Expiry date precedes harvest date."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        self.status = availability_for(self.quantity)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "quantity" in update_fields and "status" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["status"]
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                farmer_id=self.farmer_id,
                name=self.name,
            )

    @property
    def is_available(self) -> bool:
        return self.status == ProductStatus.AVAILABLE

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} {self.unit})"


class ProductRating(BaseModel):
    """One rating per (product, user); re-rating overwrites."""

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="product_ratings",
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
    )
    review = models.TextField()

    class Meta:
        db_table = "product_ratings"
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "user"],
                name="product_ratings_one_per_user",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} rated {self.rating} by {self.user_id}"
