"""Unit tests for PredictionGateway.

The model services are replaced by ``httpx.MockTransport`` handlers.
"""

from __future__ import annotations

import json
import random

import httpx
import pytest

from modules.predictions.exceptions import ServiceUnavailable, UpstreamError
from modules.predictions.gateway import PredictionGateway, PredictionGatewayConfig

pytestmark = pytest.mark.unit

YIELD_REQUEST = {
    "latitude": 18.52,
    "longitude": 73.85,
    "crop": "Rice",
    "season": "Rabi",
    "area_of_land": 10,
    "soil_type": "Loamy",
}


def _gateway(handler, local_fallback: bool = True) -> PredictionGateway:
    config = PredictionGatewayConfig(
        disease_url="http://disease.test",
        yield_url="http://yield.test/",
        timeout_seconds=1.0,
        local_fallback=local_fallback,
    )
    return PredictionGateway(
        config, rng=random.Random(42), transport=httpx.MockTransport(handler)
    )


def _timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


def _refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class TestRemoteSuccess:
    def test_disease_result_is_relayed(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"prediction": "Rice Leaf Blast", "confidence": 0.88})

        result = _gateway(handler).predict_disease("https://img.test/leaf.jpg")

        assert result.is_mock is False
        assert result.data == {"prediction": "Rice Leaf Blast", "confidence": 0.88}
        assert str(seen[0].url) == "http://disease.test/predict"
        assert json.loads(seen[0].content) == {"imageUrl": "https://img.test/leaf.jpg"}

    def test_yield_request_payload(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={"predicted_yield_kg": 5000, "suggested_crops": [], "confidence": 0.8},
            )

        result = _gateway(handler).predict_yield(**YIELD_REQUEST)

        assert seen == [YIELD_REQUEST]
        assert result.data["predicted_yield_kg"] == 5000
        assert result.is_mock is False

    def test_service_can_flag_its_own_result_as_mock(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"prediction": "Healthy", "confidence": 0.7, "is_mock": True}
            )

        result = _gateway(handler).predict_disease("https://img.test/leaf.jpg")

        assert result.is_mock is True
        assert "is_mock" not in result.data


class TestUnreachable:
    @pytest.mark.parametrize("handler", [_timeout, _refused])
    def test_falls_back_to_heuristics(self, handler):
        result = _gateway(handler).predict_yield(**YIELD_REQUEST)

        assert result.is_mock is True
        assert result.data["predicted_yield_kg"] > 0
        assert 2 <= len(result.data["suggested_crops"]) <= 3
        assert "Rice" not in result.data["suggested_crops"]

    def test_disease_fallback(self):
        result = _gateway(_timeout).predict_disease("https://img.test/leaf.jpg")

        assert result.is_mock is True
        assert set(result.data) == {"prediction", "confidence"}

    @pytest.mark.parametrize("handler", [_timeout, _refused])
    def test_without_fallback_is_unavailable(self, handler):
        with pytest.raises(ServiceUnavailable) as exc_info:
            _gateway(handler, local_fallback=False).predict_disease("https://img.test/leaf.jpg")

        assert exc_info.value.status_code == 503
        assert exc_info.value.extra == {"error": "Could not connect to the AI service"}


class TestUpstreamError:
    def test_status_and_body_are_relayed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"detail": "unsupported soil"})

        with pytest.raises(UpstreamError) as exc_info:
            _gateway(handler).predict_yield(**YIELD_REQUEST)

        assert exc_info.value.status_code == 422
        assert exc_info.value.extra == {"error": {"detail": "unsupported soil"}}

    def test_server_error_does_not_fall_back(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="model crashed")

        with pytest.raises(UpstreamError) as exc_info:
            _gateway(handler).predict_disease("https://img.test/leaf.jpg")

        assert exc_info.value.status_code == 500
        assert exc_info.value.extra == {"error": "model crashed"}


class TestMalformedSuccess:
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>ok</html>"),
            httpx.Response(200, json=["Healthy", 0.9]),
            httpx.Response(200, json={"label": "Healthy"}),
            httpx.Response(200, json={"prediction": "Healthy"}),
        ],
        ids=["not-json", "not-an-object", "unknown-keys", "no-confidence"],
    )
    def test_disease_body_is_a_bad_gateway(self, response):
        with pytest.raises(UpstreamError) as exc_info:
            _gateway(lambda request: response).predict_disease("https://img.test/leaf.jpg")

        assert exc_info.value.status_code == 502

    def test_yield_body_without_yield_is_a_bad_gateway(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"confidence": 0.8, "suggested_crops": []})

        with pytest.raises(UpstreamError) as exc_info:
            _gateway(handler).predict_yield(**YIELD_REQUEST)

        assert exc_info.value.status_code == 502
        assert exc_info.value.extra == {"error": {"confidence": 0.8, "suggested_crops": []}}

    def test_malformed_body_does_not_fall_back(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>ok</html>")

        with pytest.raises(UpstreamError) as exc_info:
            _gateway(handler).predict_disease("https://img.test/leaf.jpg")

        assert exc_info.value.extra == {"error": "<html>ok</html>"}
