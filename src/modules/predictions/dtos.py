"""Prediction request DTOs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from modules.predictions.constants import Season


class DiseasePredictionRequestDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_url: str


class YieldPredictionRequestDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    crop: str = Field(min_length=1)
    season: Season
    area_of_land: float = Field(gt=0)
    soil_type: str = Field(min_length=1)
