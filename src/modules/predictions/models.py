"""Prediction history.

One row per answered prediction request, scoped to the farmer who asked.
``is_mock`` records whether the answer came from a heuristic (local
fallback, or the model service reporting its own fallback).
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.predictions.constants import Season

confidence_validators = [MinValueValidator(0.0), MaxValueValidator(1.0)]


class DiseasePrediction(BaseModel):
    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="disease_predictions",
    )
    image_url = models.URLField(max_length=2048)
    prediction = models.CharField(max_length=255)
    confidence = models.FloatField(validators=confidence_validators)
    is_mock = models.BooleanField(default=False)

    class Meta:
        db_table = "disease_predictions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["farmer", "-created_at"], name="disease_pred_farmer_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.prediction} ({self.confidence:.2f})"


class YieldPrediction(BaseModel):
    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="yield_predictions",
    )
    latitude = models.FloatField(validators=[MinValueValidator(-90), MaxValueValidator(90)])
    longitude = models.FloatField(validators=[MinValueValidator(-180), MaxValueValidator(180)])
    crop = models.CharField(max_length=100)
    season = models.CharField(max_length=10, choices=Season.choices)
    area_of_land = models.FloatField(validators=[MinValueValidator(0.0)])
    soil_type = models.CharField(max_length=50)
    weather = models.JSONField(default=dict, blank=True)
    predicted_yield_kg = models.FloatField()
    suggested_crops = models.JSONField(default=list, blank=True)
    confidence = models.FloatField(validators=confidence_validators)
    is_mock = models.BooleanField(default=True)

    class Meta:
        db_table = "yield_predictions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["farmer", "-created_at"], name="yield_pred_farmer_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.crop} {self.season}: {self.predicted_yield_kg} kg"
