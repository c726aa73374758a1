"""Accounts repositories package."""

from modules.accounts.repositories.django_repository import FarmerDjangoRepository
from modules.accounts.repositories.interfaces import IFarmerRepository

__all__ = ["FarmerDjangoRepository", "IFarmerRepository"]
