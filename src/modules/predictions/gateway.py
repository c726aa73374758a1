"""Prediction gateway.

Calls the external model services over HTTP with a bounded timeout.
When a service cannot be reached (connection error or timeout) the
gateway either computes a local heuristic result or fails with
``ServiceUnavailable``, depending on ``PredictionGatewayConfig``.
An error response from the service is relayed as ``UpstreamError``; so
is a success response whose body is not a JSON object carrying the
expected keys (502).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
import structlog
from django.conf import settings
from rest_framework import status

from modules.predictions import heuristics
from modules.predictions.exceptions import ServiceUnavailable, UpstreamError

logger = structlog.get_logger(__name__)

DISEASE_KEYS = ("prediction", "confidence")
YIELD_KEYS = ("predicted_yield_kg", "confidence")


@dataclass(frozen=True)
class PredictionGatewayConfig:
    disease_url: str
    yield_url: str
    timeout_seconds: float = 15.0
    local_fallback: bool = True

    @classmethod
    def from_settings(cls) -> PredictionGatewayConfig:
        return cls(
            disease_url=settings.DISEASE_MODEL_URL,
            yield_url=settings.YIELD_MODEL_URL,
            timeout_seconds=settings.PREDICTION_TIMEOUT_SECONDS,
            local_fallback=settings.PREDICTION_LOCAL_FALLBACK,
        )


@dataclass(frozen=True)
class PredictionResult:
    data: Dict[str, Any]
    is_mock: bool


class PredictionGateway:
    def __init__(
        self,
        config: PredictionGatewayConfig,
        rng: Optional[random.Random] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._rng = rng or random.Random()
        self._transport = transport

    def predict_disease(self, image_url: str) -> PredictionResult:
        return self._predict(
            kind="disease",
            base_url=self._config.disease_url,
            payload={"imageUrl": image_url},
            required=DISEASE_KEYS,
            fallback=lambda: heuristics.diagnose_disease(self._rng),
        )

    def predict_yield(
        self,
        latitude: float,
        longitude: float,
        crop: str,
        season: str,
        area_of_land: float,
        soil_type: str,
    ) -> PredictionResult:
        payload = {
            "latitude": latitude,
            "longitude": longitude,
            "crop": crop,
            "season": season,
            "area_of_land": area_of_land,
            "soil_type": soil_type,
        }
        return self._predict(
            kind="yield",
            base_url=self._config.yield_url,
            payload=payload,
            required=YIELD_KEYS,
            fallback=lambda: heuristics.estimate_yield(
                crop, season, soil_type, area_of_land, self._rng
            ),
        )

    def _predict(
        self,
        kind: str,
        base_url: str,
        payload: Dict[str, Any],
        required: Tuple[str, ...],
        fallback: Callable[[], Dict[str, Any]],
    ) -> PredictionResult:
        log = logger.bind(kind=kind, url=base_url)
        try:
            response = self._post(f"{base_url.rstrip('/')}/predict", payload)
        except httpx.HTTPStatusError as exc:
            log.warning("prediction.upstream_error", status_code=exc.response.status_code)
            raise UpstreamError(exc.response.status_code, _body_of(exc.response)) from exc
        except httpx.TransportError as exc:
            if not self._config.local_fallback:
                log.error("prediction.service_unavailable", error=str(exc))
                raise ServiceUnavailable() from exc
            log.warning("prediction.fallback_used", error=str(exc))
            return PredictionResult(data=fallback(), is_mock=True)

        data = _body_of(response)
        if not isinstance(data, dict) or any(key not in data for key in required):
            log.warning("prediction.malformed_response", status_code=response.status_code)
            raise UpstreamError(status.HTTP_502_BAD_GATEWAY, data)

        is_mock = data.pop("is_mock", False) is True
        log.info("prediction.remote_succeeded", is_mock=is_mock)
        return PredictionResult(data=data, is_mock=is_mock)

    def _post(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        with httpx.Client(
            timeout=self._config.timeout_seconds, transport=self._transport
        ) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            return response


def _body_of(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
