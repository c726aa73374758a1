"""Lookup tables for the local prediction heuristics."""

from django.db import models


class Season(models.TextChoices):
    RABI = "Rabi", "Rabi"
    KHARIF = "Kharif", "Kharif"
    ZAID = "Zaid", "Zaid"


DEFAULT_CROP = "Default"

# kg per hectare
CROP_BASE_YIELDS: dict[str, int] = {
    "Rice": 4000,
    "Wheat": 3500,
    "Maize": 5000,
    "Sugarcane": 70000,
    "Cotton": 500,
    "Soybeans": 2500,
    "Potatoes": 25000,
    "Tomatoes": 40000,
    "Onions": 20000,
    "Chillies": 15000,
    DEFAULT_CROP: 3000,
}

SEASON_MULTIPLIERS: dict[str, float] = {
    Season.RABI: 1.2,
    Season.KHARIF: 1.0,
    Season.ZAID: 0.8,
}

SOIL_MULTIPLIERS: dict[str, float] = {
    "Loamy": 1.2,
    "Clay": 1.0,
    "Sandy": 0.8,
    "Silt": 1.1,
    "Black": 1.3,
    "Red": 0.9,
}

CROP_DISEASES: tuple[str, ...] = (
    "Tomato Early Blight",
    "Tomato Late Blight",
    "Tomato Leaf Mold",
    "Potato Early Blight",
    "Potato Late Blight",
    "Corn Common Rust",
    "Corn Northern Leaf Blight",
    "Rice Brown Spot",
    "Rice Leaf Blast",
    "Wheat Yellow Rust",
    "Apple Scab",
    "Grape Black Rot",
    "Healthy",
)

MOCK_WEATHER_RANGES: dict[str, tuple[int, int]] = {
    "temperature": (20, 35),
    "humidity": (40, 80),
    "rainfall": (50, 200),
}

DISEASE_CONFIDENCE_RANGE = (0.6, 0.95)
YIELD_CONFIDENCE_RANGE = (0.7, 0.95)
