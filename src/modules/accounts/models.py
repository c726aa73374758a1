"""User model with marketplace roles.

Farmers list products, receive orders and use the prediction and forum
features; consumers fill carts and place orders.  Farm details live on the
user row because a farmer has exactly one farm profile.
"""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class UserRole(models.TextChoices):
    FARMER = "farmer", "Farmer"
    CONSUMER = "consumer", "Consumer"
    ADMIN = "admin", "Admin"


class User(AbstractUser):
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CONSUMER,
    )
    name = models.CharField(max_length=255, blank=True, default="")
    contact_number = models.CharField(max_length=20, blank=True, default="")

    farm_name = models.CharField(max_length=255, blank=True, default="")
    farm_address = models.TextField(blank=True, default="")
    farm_size_acres = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    farm_latitude = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    farm_longitude = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )

    class Meta:
        db_table = "users"
        indexes = [
            models.Index(fields=["role"], name="users_role_idx"),
        ]

    @property
    def is_farmer(self) -> bool:
        return self.role == UserRole.FARMER

    @property
    def display_name(self) -> str:
        return self.name or self.username

    def __str__(self) -> str:
        return f"{self.display_name} ({self.role})"
