"""Farmer profile service (Use Cases).

Covers the farmer's own profile, the sales dashboard and the
nearby-farmers search.  Account creation and credential issuance are
handled by Django auth and SimpleJWT.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

import structlog
from django.db import transaction

from modules.accounts.dtos import FarmerAnalyticsDTO
from modules.accounts.exceptions import FarmerNotFound
from modules.accounts.geo import bounding_box, haversine_m

if TYPE_CHECKING:
    from modules.accounts.dtos import NearbyFarmersQueryDTO, UpdateFarmerProfileDTO
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IFarmerRepository

logger = structlog.get_logger(__name__)

PROFILE_FIELDS = (
    "name",
    "contact_number",
    "farm_name",
    "farm_address",
    "farm_size_acres",
    "farm_latitude",
    "farm_longitude",
)


class FarmerService:
    def __init__(self, repository: IFarmerRepository) -> None:
        self._repo = repository

    def get_profile(self, farmer_id) -> User:
        farmer = self._repo.get_by_id(farmer_id)
        if not farmer:
            raise FarmerNotFound()
        return farmer

    @transaction.atomic
    def update_profile(self, farmer_id, dto: UpdateFarmerProfileDTO) -> User:
        farmer = self.get_profile(farmer_id)
        changed = []
        for field in PROFILE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(farmer, field, value)
                changed.append(field)
        farmer = self._repo.save(farmer)
        logger.info("farmer.profile_updated", farmer_id=farmer.pk, fields=changed)
        return farmer

    def analytics(self, farmer_id) -> FarmerAnalyticsDTO:
        self.get_profile(farmer_id)
        return FarmerAnalyticsDTO(
            total_products=self._repo.count_products(farmer_id),
            total_orders=self._repo.count_orders(farmer_id),
            total_revenue=self._repo.delivered_revenue(farmer_id),
            product_performance=self._repo.product_performance(farmer_id),
            recent_orders=self._repo.recent_orders(farmer_id),
            monthly_data=self._repo.monthly_sales(farmer_id),
        )

    def nearby(self, query: NearbyFarmersQueryDTO) -> List[Tuple[User, float]]:
        """Farmers within ``max_distance_m`` of the point, closest first."""
        box = bounding_box(query.latitude, query.longitude, query.max_distance_m)
        matches = []
        for farmer in self._repo.within_box(*box):
            distance = haversine_m(
                query.latitude,
                query.longitude,
                farmer.farm_latitude,
                farmer.farm_longitude,
            )
            if distance <= query.max_distance_m:
                matches.append((farmer, distance))
        matches.sort(key=lambda pair: pair[1])
        return matches
