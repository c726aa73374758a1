"""Local fallback predictions.

Used when the model service cannot be reached.  Every function takes the
random source explicitly so callers (and tests) decide how it is seeded.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List

from modules.predictions.constants import (
    CROP_BASE_YIELDS,
    CROP_DISEASES,
    DEFAULT_CROP,
    DISEASE_CONFIDENCE_RANGE,
    MOCK_WEATHER_RANGES,
    SEASON_MULTIPLIERS,
    SOIL_MULTIPLIERS,
    YIELD_CONFIDENCE_RANGE,
)


def mock_weather(rng: random.Random) -> Dict[str, int]:
    return {
        name: round(low + rng.random() * (high - low))
        for name, (low, high) in MOCK_WEATHER_RANGES.items()
    }


def weather_multiplier(weather: Dict[str, Any]) -> float:
    """Penalise conditions outside the comfortable growing band."""
    multiplier = 1.0

    temperature = weather.get("temperature", 25)
    if temperature < 15:
        multiplier *= 0.7
    elif temperature > 35:
        multiplier *= 0.8

    humidity = weather.get("humidity", 60)
    if humidity < 30:
        multiplier *= 0.9
    elif humidity > 90:
        multiplier *= 0.85

    rainfall = weather.get("rainfall", 100)
    if rainfall < 50:
        multiplier *= 0.7
    elif rainfall > 300:
        multiplier *= 0.8

    return multiplier


def expected_yield_kg(
    crop: str,
    season: str,
    soil_type: str,
    area_of_land: float,
    weather: Dict[str, Any],
) -> int:
    base = CROP_BASE_YIELDS.get(crop, CROP_BASE_YIELDS[DEFAULT_CROP])
    return round(
        base
        * SEASON_MULTIPLIERS.get(season, 1.0)
        * SOIL_MULTIPLIERS.get(soil_type, 1.0)
        * weather_multiplier(weather)
        * (float(area_of_land) / 10)
    )


def suggest_crops(crop: str, rng: random.Random) -> List[str]:
    """Two or three distinct alternatives, never the crop itself."""
    candidates = [name for name in CROP_BASE_YIELDS if name not in (DEFAULT_CROP, crop)]
    return rng.sample(candidates, rng.randint(2, 3))


def _confidence(bounds: tuple[float, float], rng: random.Random) -> float:
    low, high = bounds
    return round(low + rng.random() * (high - low), 4)


def estimate_yield(
    crop: str,
    season: str,
    soil_type: str,
    area_of_land: float,
    rng: random.Random,
) -> Dict[str, Any]:
    weather = mock_weather(rng)
    return {
        "predicted_yield_kg": expected_yield_kg(crop, season, soil_type, area_of_land, weather),
        "suggested_crops": suggest_crops(crop, rng),
        "confidence": _confidence(YIELD_CONFIDENCE_RANGE, rng),
        "weather": weather,
    }


def diagnose_disease(rng: random.Random) -> Dict[str, Any]:
    return {
        "prediction": rng.choice(CROP_DISEASES),
        "confidence": _confidence(DISEASE_CONFIDENCE_RANGE, rng),
    }
