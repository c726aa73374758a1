"""Prediction API views (farmer only).

``/predictions/`` for crop disease and ``/yield-predictions/`` for crop
yield; each offers create, history and detail.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import IsFarmer
from modules.predictions.dtos import DiseasePredictionRequestDTO, YieldPredictionRequestDTO
from modules.predictions.gateway import PredictionGateway, PredictionGatewayConfig
from modules.predictions.repositories.django_repository import (
    DiseasePredictionDjangoRepository,
    YieldPredictionDjangoRepository,
)
from modules.predictions.serializers import (
    DiseasePredictionRequestSerializer,
    DiseasePredictionSerializer,
    YieldPredictionRequestSerializer,
    YieldPredictionSerializer,
)
from modules.predictions.services import PredictionService


def build_prediction_service() -> PredictionService:
    return PredictionService(
        gateway=PredictionGateway(PredictionGatewayConfig.from_settings()),
        disease_repository=DiseasePredictionDjangoRepository(),
        yield_repository=YieldPredictionDjangoRepository(),
    )


class _PredictionViewSet(GenericViewSet):
    permission_classes = [IsFarmer]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_prediction_service()

    def list(self, request: Request) -> Response:
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(self.get_serializer(page, many=True).data)


class DiseasePredictionViewSet(_PredictionViewSet):
    serializer_class = DiseasePredictionSerializer

    def get_queryset(self):
        return self._service.disease_history(self.request.user)

    def create(self, request: Request) -> Response:
        """POST /api/v1/predictions/"""
        serializer = DiseasePredictionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = self._service.predict_disease(
            request.user, DiseasePredictionRequestDTO(**serializer.validated_data)
        )
        return Response(DiseasePredictionSerializer(record).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/predictions/{pk}/"""
        record = self._service.get_disease(pk, request.user)
        return Response(DiseasePredictionSerializer(record).data)


class YieldPredictionViewSet(_PredictionViewSet):
    serializer_class = YieldPredictionSerializer

    def get_queryset(self):
        return self._service.yield_history(self.request.user)

    def create(self, request: Request) -> Response:
        """POST /api/v1/yield-predictions/"""
        serializer = YieldPredictionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = self._service.predict_yield(
            request.user, YieldPredictionRequestDTO(**serializer.validated_data)
        )
        return Response(YieldPredictionSerializer(record).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/yield-predictions/{pk}/"""
        record = self._service.get_yield(pk, request.user)
        return Response(YieldPredictionSerializer(record).data)
