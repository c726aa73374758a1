"""Integration tests for /api/v1/farmers/."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

FARMERS_URL = "/api/v1/farmers/"


class TestProfile:
    def test_me(self, farmer_client, farmer):
        response = farmer_client.get(f"{FARMERS_URL}me/")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == farmer.pk
        assert body["role"] == "farmer"
        assert body["farmDetails"]["farmName"] == "Green Acres"

    def test_partial_update(self, farmer_client):
        response = farmer_client.patch(
            f"{FARMERS_URL}me/",
            {"farmDetails": {"latitude": 18.52, "longitude": 73.85}},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["farmDetails"]["latitude"] == 18.52
        assert response.json()["farmDetails"]["farmName"] == "Green Acres"

    def test_full_update_requires_every_field(self, farmer_client):
        response = farmer_client.put(f"{FARMERS_URL}me/", {"name": "Ravi K"}, format="json")

        assert response.status_code == 400

    def test_consumers_are_forbidden(self, consumer_client):
        assert consumer_client.get(f"{FARMERS_URL}me/").status_code == 403


class TestAnalytics:
    def test_dashboard_shape(self, farmer_client, farmer, make_product):
        make_product(farmer, name="Tomatoes")

        response = farmer_client.get(f"{FARMERS_URL}analytics/")

        assert response.status_code == 200
        body = response.json()
        assert body["totalProducts"] == 1
        assert body["totalOrders"] == 0
        assert body["totalRevenue"] == "0.00"
        assert body["productPerformance"][0]["name"] == "Tomatoes"
        assert body["recentOrders"] == []
        assert body["monthlyData"] == []


class TestNearby:
    def test_public_search(self, api_client, farmer, other_farmer):
        farmer.farm_latitude, farmer.farm_longitude = 18.530, 73.850
        farmer.save()
        other_farmer.farm_latitude, other_farmer.farm_longitude = 28.61, 77.20
        other_farmer.save()

        response = api_client.get(
            f"{FARMERS_URL}nearby/", {"latitude": 18.52, "longitude": 73.85, "maxDistance": 5000}
        )

        assert response.status_code == 200
        body = response.json()
        assert [row["id"] for row in body] == [farmer.pk]
        assert 1000 < body[0]["distanceMeters"] < 1200

    def test_coordinates_required(self, api_client):
        response = api_client.get(f"{FARMERS_URL}nearby/")

        assert response.status_code == 400
