"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration


def _assert_standard_shape(data):
    assert data["type"] in {"client_error", "server_error"}
    assert isinstance(data["message"], str)
    assert isinstance(data["errors"], list)
    assert data["errors"]
    assert {"code", "detail", "attr"} <= set(data["errors"][0])


class TestStandardizedErrors:
    def test_auth_error_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401
        _assert_standard_shape(response.json())

    def test_malformed_json_has_standard_format(self, farmer_client):
        response = farmer_client.post(
            "/api/v1/products/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        _assert_standard_shape(data)
        assert data["errors"][0]["code"] == "parse_error"

    def test_field_errors_carry_attr(self, farmer_client):
        response = farmer_client.post("/api/v1/products/", {}, format="json")
        assert response.status_code == 400
        attrs = {error["attr"] for error in response.json()["errors"]}
        assert {"name", "price"} <= attrs

    def test_role_error_is_403(self, consumer_client):
        response = consumer_client.post("/api/v1/products/", {}, format="json")
        assert response.status_code == 403
        _assert_standard_shape(response.json())

    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/products/00000000-0000-0000-0000-000000000000/")
        assert response.status_code == 404
        data = response.json()
        _assert_standard_shape(data)
        assert data["errors"][0]["code"] == "product_not_found"
