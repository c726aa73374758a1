"""Order aggregate: the order, its snapshot lines and its status trail.

An order is addressed to exactly one farmer.  Lines copy product name,
unit price and quantity at purchase time, so later catalog edits never
change what was bought.  After creation only ``status`` and
``cancel_reason`` move, and each move appends an OrderStatusHistory row.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.conf import settings
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
)
from shared.domain.events import DomainEventMixin


def order_total(lines: Iterable[Any]) -> Decimal:
    """Sum of ``unit_price * quantity``; computed once when the order is placed."""
    return sum((line.unit_price * line.quantity for line in lines), Decimal("0.00"))


def new_order_number(when: Optional[datetime] = None) -> str:
    """``ORD-<yyyymmdd>-<6 hex>``, readable over the phone."""
    day = (when or timezone.now()).strftime("%Y%m%d")
    return f"ORD-{day}-{secrets.token_hex(3).upper()}"


class Order(DomainEventMixin, BaseModel):
    order_number = models.CharField(max_length=20, unique=True, editable=False)
    consumer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders_placed"
    )
    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders_received"
    )
    status = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)

    # shippingDetails, stored flat
    shipping_full_name = models.CharField(max_length=255)
    shipping_address = models.TextField()
    shipping_city = models.CharField(max_length=100)
    shipping_state = models.CharField(max_length=100)
    shipping_postal_code = models.CharField(max_length=20)
    shipping_phone = models.CharField(max_length=20)

    notes = models.TextField(blank=True, default="")
    cancel_reason = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["consumer", "-created_at"], name="orders_consumer_idx"),
            models.Index(fields=["farmer", "status"], name="orders_farmer_status_idx"),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in VALID_TRANSITIONS.get(self.status, ())

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            self.order_number = self._unused_order_number()
        super().save(*args, **kwargs)

    @classmethod
    def _unused_order_number(cls) -> str:
        for _ in range(ORDER_NUMBER_MAX_RETRIES):
            candidate = new_order_number()
            if not cls.objects.filter(order_number=candidate).exists():
                return candidate
        raise RuntimeError("could not allocate an unused order number")

    def __str__(self) -> str:
        return f"{self.order_number} [{self.status}]"


class OrderItem(BaseModel):
    """Snapshot line; ``product`` is a loose reference that may be nulled."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    product_name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(check=models.Q(quantity__gt=0), name="order_items_qty_gt_0"),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.product_name}"


class OrderStatusHistory(BaseModel):
    """One row per status move; ``old_status`` is empty for the placement row."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="status_history")
    old_status = models.CharField(  # noqa: DJ01
        max_length=20, choices=OrderStatus.choices, null=True, blank=True
    )
    new_status = models.CharField(max_length=20, choices=OrderStatus.choices)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.old_status or '-'} -> {self.new_status}"
