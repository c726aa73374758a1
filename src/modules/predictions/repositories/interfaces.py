"""Prediction history repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, TypeVar

from django.db import models

from modules.core.repositories.interfaces import IRepository

T = TypeVar("T", bound=models.Model)


class IPredictionRepository(IRepository[T]):
    """Same contract for disease and yield history."""

    @abstractmethod
    def for_farmer(self, farmer_id: Any) -> "models.QuerySet[T]":
        """The farmer's records, newest first."""
