"""Product DTOs for the Service Layer.

Immutable pydantic v2 contracts between the DRF serializers and
``ProductService``.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.products.constants import (
    MAX_RATING,
    MIN_RATING,
    ProductCategory,
    ProductUnit,
)


class CreateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: ProductCategory
    price: Decimal
    unit: ProductUnit
    quantity: int = 0
    harvest_date: date
    expiry_date: Optional[date] = None
    organic: bool = False

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity cannot be negative.")
        return v

    @model_validator(mode="after")
    def expiry_after_harvest(self) -> CreateProductDTO:
        if self.expiry_date and self.expiry_date < self.harvest_date:
            raise ValueError("Expiry date cannot precede harvest date.")
        return self


class UpdateProductDTO(BaseModel):
    """Only supplied fields are applied."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[Decimal] = None
    unit: Optional[ProductUnit] = None
    quantity: Optional[int] = None
    harvest_date: Optional[date] = None
    expiry_date: Optional[date] = None
    organic: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Quantity cannot be negative.")
        return v


class RateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    rating: int
    review: str

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: int) -> int:
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")
        return v

    @field_validator("review")
    @classmethod
    def review_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Review must not be empty.")
        return v.strip()
