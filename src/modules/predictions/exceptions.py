"""Prediction domain exceptions."""

from __future__ import annotations

from typing import Any

from rest_framework import status

from modules.core.exceptions import DomainError, Forbidden, NotFound


class PredictionNotFound(NotFound):
    code = "prediction_not_found"
    default_message = "Prediction not found."


class NotPredictionOwner(Forbidden):
    pass


class ServiceUnavailable(DomainError):
    """Model service unreachable and local fallback disabled."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "service_unavailable"
    default_message = "AI Service Unavailable"

    def __init__(self) -> None:
        super().__init__(error="Could not connect to the AI service")


class UpstreamError(DomainError):
    """Model service answered with an error; its status and body are relayed."""

    code = "upstream_error"
    default_message = "AI Service Error"

    def __init__(self, upstream_status: int, body: Any) -> None:
        self.status_code = (
            upstream_status if upstream_status >= 400 else status.HTTP_502_BAD_GATEWAY
        )
        super().__init__(error=body)
