"""Django ORM implementations of the prediction history repositories."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.predictions.models import DiseasePrediction, YieldPrediction
from modules.predictions.repositories.interfaces import IPredictionRepository

logger = structlog.get_logger(__name__)


class _PredictionDjangoRepository(IPredictionRepository):
    model: Type[models.Model]

    def get_by_id(self, id: str) -> Optional[Any]:
        try:
            return self.model.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        queryset = self.model.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def for_farmer(self, farmer_id: Any):
        return self.model.objects.filter(farmer_id=farmer_id)

    @transaction.atomic
    def save(self, entity: Any) -> Any:
        entity.save()
        logger.info(
            "prediction.saved",
            model=self.model.__name__,
            prediction_id=str(entity.id),
            is_mock=entity.is_mock,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = self.model.objects.filter(id=id).delete()
        return deleted > 0


class DiseasePredictionDjangoRepository(_PredictionDjangoRepository):
    model = DiseasePrediction


class YieldPredictionDjangoRepository(_PredictionDjangoRepository):
    model = YieldPrediction
