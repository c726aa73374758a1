"""Prediction service layer (Use Cases).

Every answered request is stored in the farmer's history before it is
returned, whichever path (model service or local fallback) produced it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.predictions.exceptions import NotPredictionOwner, PredictionNotFound
from modules.predictions.models import DiseasePrediction, YieldPrediction

if TYPE_CHECKING:
    from django.db import models

    from modules.accounts.models import User
    from modules.predictions.dtos import (
        DiseasePredictionRequestDTO,
        YieldPredictionRequestDTO,
    )
    from modules.predictions.gateway import PredictionGateway
    from modules.predictions.repositories.interfaces import IPredictionRepository

logger = structlog.get_logger(__name__)


class PredictionService:
    def __init__(
        self,
        gateway: PredictionGateway,
        disease_repository: IPredictionRepository,
        yield_repository: IPredictionRepository,
    ) -> None:
        self._gateway = gateway
        self._disease_repo = disease_repository
        self._yield_repo = yield_repository

    # ------------------------------------------------------------------
    # Disease
    # ------------------------------------------------------------------

    @transaction.atomic
    def predict_disease(self, farmer: User, dto: DiseasePredictionRequestDTO) -> DiseasePrediction:
        result = self._gateway.predict_disease(dto.image_url)
        record = DiseasePrediction(
            farmer=farmer,
            image_url=dto.image_url,
            prediction=result.data["prediction"],
            confidence=result.data["confidence"],
            is_mock=result.is_mock,
        )
        return self._disease_repo.save(record)

    def disease_history(self, farmer: User) -> models.QuerySet[DiseasePrediction]:
        return self._disease_repo.for_farmer(farmer.pk)

    def get_disease(self, id: Any, farmer: User) -> DiseasePrediction:
        return self._owned(self._disease_repo, id, farmer)

    # ------------------------------------------------------------------
    # Yield
    # ------------------------------------------------------------------

    @transaction.atomic
    def predict_yield(self, farmer: User, dto: YieldPredictionRequestDTO) -> YieldPrediction:
        result = self._gateway.predict_yield(
            latitude=dto.latitude,
            longitude=dto.longitude,
            crop=dto.crop,
            season=dto.season,
            area_of_land=dto.area_of_land,
            soil_type=dto.soil_type,
        )
        record = YieldPrediction(
            farmer=farmer,
            latitude=dto.latitude,
            longitude=dto.longitude,
            crop=dto.crop,
            season=dto.season,
            area_of_land=dto.area_of_land,
            soil_type=dto.soil_type,
            weather=result.data.get("weather") or {},
            predicted_yield_kg=result.data["predicted_yield_kg"],
            suggested_crops=result.data.get("suggested_crops") or [],
            confidence=result.data["confidence"],
            is_mock=result.is_mock,
        )
        return self._yield_repo.save(record)

    def yield_history(self, farmer: User) -> models.QuerySet[YieldPrediction]:
        return self._yield_repo.for_farmer(farmer.pk)

    def get_yield(self, id: Any, farmer: User) -> YieldPrediction:
        return self._owned(self._yield_repo, id, farmer)

    @staticmethod
    def _owned(repository: IPredictionRepository, id: Any, farmer: User) -> Any:
        record = repository.get_by_id(id)
        if record is None:
            raise PredictionNotFound()
        if record.farmer_id != farmer.pk:
            logger.warning("prediction.not_owner", prediction_id=str(id), farmer_id=farmer.pk)
            raise NotPredictionOwner()
        return record
