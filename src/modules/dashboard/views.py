"""Dashboard API views (read-only)."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.api import ServiceAPIMixin
from modules.dashboard.repositories import DashboardDjangoRepository
from modules.dashboard.serializers import DashboardStatsSerializer
from modules.dashboard.services import DashboardService
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.serializers import OrderListSerializer


class DashboardViewSet(ServiceAPIMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DashboardService(DashboardDjangoRepository(), OrderDjangoRepository())

    @action(detail=False, methods=["get"])
    def stats(self, request: Request) -> Response:
        """GET /api/v1/dashboard/stats/"""
        return self.run(
            self._service.get_dashboard_stats,
            serializer_class=DashboardStatsSerializer,
        )

    @action(detail=False, methods=["get"], url_path="pending-orders")
    def pending_orders(self, request: Request) -> Response:
        """GET /api/v1/dashboard/pending-orders/"""
        return self.run(
            self._service.get_pending_orders,
            serializer_class=OrderListSerializer,
            many=True,
        )
