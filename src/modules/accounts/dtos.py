"""Accounts DTOs for the Service Layer.

- ``UpdateFarmerProfileDTO``: input for ``PUT/PATCH /farmers/me``.
- ``NearbyFarmersQueryDTO``: query for the nearby-farmers search.
- ``FarmerAnalyticsDTO``: dashboard numbers for a farmer.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UpdateFarmerProfileDTO(BaseModel):
    """All fields optional; only supplied ones are written."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    contact_number: Optional[str] = None
    farm_name: Optional[str] = None
    farm_address: Optional[str] = None
    farm_size_acres: Optional[Decimal] = Field(default=None, ge=0)
    farm_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    farm_longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("name", "contact_number")
    @classmethod
    def must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Value must not be blank.")
        return v.strip() if v is not None else v


class NearbyFarmersQueryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    max_distance_m: int = Field(default=10_000, gt=0)


class FarmerAnalyticsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int
    total_orders: int
    total_revenue: Decimal
    product_performance: List[Dict[str, Any]]
    recent_orders: List[Any]
    monthly_data: List[Dict[str, Any]]
