"""Prediction DRF serializers.

Disease payloads are camelCase; yield payloads keep the model service's
snake_case names (``area_of_land``, ``soil_type``, ...).
"""

from __future__ import annotations

from rest_framework import serializers

from modules.predictions.constants import Season
from modules.predictions.models import DiseasePrediction, YieldPrediction


class DiseasePredictionRequestSerializer(serializers.Serializer):
    imageUrl = serializers.URLField(source="image_url", max_length=2048)


class YieldPredictionRequestSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    crop = serializers.CharField(max_length=100)
    season = serializers.ChoiceField(choices=Season.choices)
    area_of_land = serializers.FloatField(min_value=0.01)
    soil_type = serializers.CharField(max_length=50)


class DiseasePredictionSerializer(serializers.ModelSerializer):
    farmerId = serializers.IntegerField(source="farmer_id", read_only=True)
    imageUrl = serializers.URLField(source="image_url", read_only=True)
    isMock = serializers.BooleanField(source="is_mock", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = DiseasePrediction
        fields = ["id", "farmerId", "imageUrl", "prediction", "confidence", "isMock", "createdAt"]
        read_only_fields = fields


class YieldPredictionSerializer(serializers.ModelSerializer):
    farmerId = serializers.IntegerField(source="farmer_id", read_only=True)
    location = serializers.SerializerMethodField()
    isMock = serializers.BooleanField(source="is_mock", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = YieldPrediction
        fields = [
            "id",
            "farmerId",
            "location",
            "crop",
            "season",
            "area_of_land",
            "soil_type",
            "weather",
            "predicted_yield_kg",
            "suggested_crops",
            "confidence",
            "isMock",
            "createdAt",
        ]
        read_only_fields = fields

    def get_location(self, obj: YieldPrediction) -> dict:
        return {"lat": obj.latitude, "lng": obj.longitude}
