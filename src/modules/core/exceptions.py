"""Domain error base class and the API exception handler.

Every module raises subclasses of ``DomainError`` from its service layer.
``api_exception_handler`` (wired in ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``)
renders those, DRF's own ``APIException`` family and pydantic validation
errors with one body shape::

    {
        "type": "client_error",
        "message": "Insufficient quantity for Tomatoes.",
        "errors": [{"code": "insufficient_stock", "detail": "...", "attr": null}],
        ...extra
    }
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Business rule violation raised by the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "domain_error"
    default_message: str = "The request could not be processed."

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)


class ValidationFailed(DomainError):
    code = "invalid"
    default_message = "Invalid input."

    def __init__(self, message: Optional[str] = None, attr: Optional[str] = None, **extra: Any) -> None:
        self.attr = attr
        super().__init__(message, **extra)


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found."


class Forbidden(DomainError):
    """Actor does not own the resource.  Rendered as 401 ``Not authorized``."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authorized"
    default_message = "Not authorized."


# ---------------------------------------------------------------------------
# Exception handler
# ---------------------------------------------------------------------------


def _error_type(status_code: int) -> str:
    return "server_error" if status_code >= 500 else "client_error"


def _flatten_drf_detail(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Turn DRF's nested ``ErrorDetail`` structure into a flat error list."""
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            nested_attr = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                nested_attr = attr
            errors.extend(_flatten_drf_detail(value, nested_attr))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(_flatten_drf_detail(value, f"{attr}.{index}" if attr else str(index)))
            else:
                errors.extend(_flatten_drf_detail(value, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "invalid"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def _render(
    status_code: int, message: str, errors: List[Dict[str, Any]], **extra: Any
) -> Response:
    body: Dict[str, Any] = {
        "type": _error_type(status_code),
        "message": message,
        "errors": errors,
    }
    body.update(extra)
    return Response(body, status=status_code)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, DomainError):
        logger.info(
            "api.domain_error",
            code=exc.code,
            status_code=exc.status_code,
            error_message=exc.message,
        )
        return _render(
            exc.status_code,
            exc.message,
            [{"code": exc.code, "detail": exc.message, "attr": getattr(exc, "attr", None)}],
            **exc.extra,
        )

    if isinstance(exc, PydanticValidationError):
        errors = [
            {
                "code": "invalid",
                "detail": error["msg"],
                "attr": ".".join(str(part) for part in error["loc"]) or None,
            }
            for error in exc.errors()
        ]
        message = errors[0]["detail"] if errors else "Invalid input."
        return _render(status.HTTP_400_BAD_REQUEST, message, errors)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    errors = _flatten_drf_detail(exc.detail)
    message = errors[0]["detail"] if errors else str(exc)

    response.data = {
        "type": _error_type(response.status_code),
        "message": message,
        "errors": errors,
    }
    return response
