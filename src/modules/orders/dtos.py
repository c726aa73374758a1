"""Order DTOs for the Service Layer.

Immutable pydantic v2 contracts between the DRF serializers and
``OrderService``.  ``OrderLine`` is the snapshot the coordinator builds
from the catalog before any order is written.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.orders.constants import PaymentMethod

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ShippingDetailsDTO(BaseModel):
    """Every field is mandatory and non-blank."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, str_min_length=1)

    full_name: str
    address: str
    city: str
    state: str
    postal_code: str
    phone_number: str


class OrderItemRequestDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CheckoutDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    payment_method: PaymentMethod
    shipping: ShippingDetailsDTO
    notes: str = ""


class PlaceOrderDTO(CheckoutDTO):
    """Direct order with explicit items; split by farmer like checkout."""

    items: List[OrderItemRequestDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[OrderItemRequestDTO]) -> List[OrderItemRequestDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def no_duplicate_products(self) -> PlaceOrderDTO:
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Duplicate product IDs are not allowed in the same order.")
        return self


class SetOrderStatusDTO(BaseModel):
    """``status`` stays a plain string; the service owns the state machine."""

    model_config = ConfigDict(frozen=True)

    status: str
    cancel_reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


class OrderLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    farmer_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
