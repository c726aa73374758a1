"""Farmer API views.

``/farmers/me`` and ``/farmers/analytics`` belong to the authenticated
farmer; ``/farmers/nearby`` is public.
"""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import NearbyFarmersQueryDTO, UpdateFarmerProfileDTO
from modules.accounts.permissions import IsFarmer
from modules.accounts.repositories.django_repository import FarmerDjangoRepository
from modules.accounts.serializers import (
    FarmerProfileSerializer,
    NearbyFarmersQuerySerializer,
    PublicFarmerSerializer,
    UpdateFarmerProfileSerializer,
)
from modules.accounts.services import FarmerService
from modules.orders.serializers import OrderListSerializer


class FarmerViewSet(GenericViewSet):
    permission_classes = [IsFarmer]
    serializer_class = FarmerProfileSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = FarmerService(repository=FarmerDjangoRepository())

    def get_permissions(self):
        if self.action == "nearby":
            return [AllowAny()]
        return super().get_permissions()

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get", "put", "patch"], url_path="me")
    def me(self, request: Request) -> Response:
        """GET/PUT/PATCH /api/v1/farmers/me/"""
        if request.method == "GET":
            farmer = self._service.get_profile(request.user.pk)
            return Response(FarmerProfileSerializer(farmer).data)

        serializer = UpdateFarmerProfileSerializer(
            data=request.data, partial=request.method == "PATCH"
        )
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        farm = data.pop("farmDetails", {}) or {}

        dto = UpdateFarmerProfileDTO(**data, **farm)
        farmer = self._service.update_profile(request.user.pk, dto)
        return Response(FarmerProfileSerializer(farmer).data)

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"])
    def analytics(self, request: Request) -> Response:
        """GET /api/v1/farmers/analytics/"""
        stats = self._service.analytics(request.user.pk)
        return Response(
            {
                "totalProducts": stats.total_products,
                "totalOrders": stats.total_orders,
                "totalRevenue": str(stats.total_revenue),
                "productPerformance": [
                    {
                        "id": str(row["id"]),
                        "name": row["name"],
                        "totalSales": row["total_sales"],
                    }
                    for row in stats.product_performance
                ],
                "recentOrders": OrderListSerializer(stats.recent_orders, many=True).data,
                "monthlyData": [
                    {**row, "totalSales": str(row["totalSales"])}
                    for row in stats.monthly_data
                ],
            }
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"])
    def nearby(self, request: Request) -> Response:
        """GET /api/v1/farmers/nearby/?latitude=..&longitude=..&maxDistance=.."""
        query = NearbyFarmersQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        matches = self._service.nearby(
            NearbyFarmersQueryDTO(
                latitude=params["latitude"],
                longitude=params["longitude"],
                max_distance_m=params["maxDistance"],
            )
        )
        return Response(
            [
                {**PublicFarmerSerializer(farmer).data, "distanceMeters": round(distance)}
                for farmer, distance in matches
            ]
        )
