"""Catalog constants."""

from django.db import models


class ProductCategory(models.TextChoices):
    VEGETABLES = "vegetables", "Vegetables"
    FRUITS = "fruits", "Fruits"
    GRAINS = "grains", "Grains"
    DAIRY = "dairy", "Dairy"
    OTHER = "other", "Other"


class ProductUnit(models.TextChoices):
    KG = "kg", "Kilogram"
    GRAM = "gram", "Gram"
    PIECE = "piece", "Piece"
    DOZEN = "dozen", "Dozen"
    LITER = "liter", "Liter"


class ProductStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    SOLD_OUT = "sold_out", "Sold out"


MIN_RATING = 1
MAX_RATING = 5
