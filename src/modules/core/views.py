"""Liveness/readiness probe for load balancers and the container runtime."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connection
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)

PROBE_KEY = "marketplace:health"


def _ping_database() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set(PROBE_KEY, "ok", 10)
    if cache.get(PROBE_KEY) != "ok":
        raise ConnectionError("cache did not return the probe value")


def _probe(name: str, ping: Callable[[], None]) -> Dict[str, Any]:
    started = time.monotonic()
    try:
        ping()
    except Exception:
        logger.exception("health.dependency_down", dependency=name)
        return {"status": "down"}
    return {"status": "up", "response_time_ms": round((time.monotonic() - started) * 1000, 2)}


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health -> 200 when the database and the cache answer, else 503."""
    services = {"database": _probe("database", _ping_database), "cache": _probe("cache", _ping_cache)}
    healthy = all(service["status"] == "up" for service in services.values())
    overall = "healthy" if healthy else "unhealthy"
    logger.info("health.checked", status=overall)
    return JsonResponse(
        {"status": overall, "timestamp": timezone.now().isoformat(), "services": services},
        status=200 if healthy else 503,
    )
