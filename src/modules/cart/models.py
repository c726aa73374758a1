"""Cart and CartItem models.

One cart per consumer, created lazily and emptied (not deleted) by
checkout.  One line per product.  ``total`` is stored and recomputed by
``cart_total`` after every mutation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


def cart_total(items: Iterable[CartItem]) -> Decimal:
    """Σ(product price × quantity) over the lines whose product is still listed."""
    return sum(
        (item.product.price * item.quantity for item in items if not item.product.is_deleted),
        Decimal("0.00"),
    )


class Cart(BaseModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "carts"

    def lines(self) -> list[CartItem]:
        """Cart lines; an unsaved (never created) cart has none."""
        if self._state.adding:
            return []
        return list(self.items.all())

    def __str__(self) -> str:
        return f"Cart of {self.user_id}"


class CartItem(BaseModel):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "cart_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product"],
                name="cart_items_one_line_per_product",
            ),
            models.CheckConstraint(
                check=models.Q(quantity__gte=1),
                name="cart_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    def __str__(self) -> str:
        return f"{self.quantity} x {self.product_id}"
