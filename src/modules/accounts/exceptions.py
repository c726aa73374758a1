"""Accounts domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFound


class FarmerNotFound(NotFound):
    code = "farmer_not_found"
    default_message = "Farmer not found."
