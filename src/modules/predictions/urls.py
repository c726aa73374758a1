"""Prediction URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.predictions.views import DiseasePredictionViewSet, YieldPredictionViewSet

router = DefaultRouter(trailing_slash=True)
router.register("predictions", DiseasePredictionViewSet, basename="prediction")
router.register("yield-predictions", YieldPredictionViewSet, basename="yield-prediction")

urlpatterns = router.urls
