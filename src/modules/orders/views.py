"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Domain
exceptions are rendered by ``ServiceAPIMixin.run``; the view never
swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.orders.dtos import (
    CreateOrderDTO,
    PaymentDTO,
    ScheduleFittingDTO,
    StatusUpdateDTO,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    NotesSerializer,
    OrderListSerializer,
    OrderSerializer,
    PaymentSerializer,
    ScheduleFittingSerializer,
    StatusHistorySerializer,
    StatusUpdateSerializer,
)
from modules.orders.services import build_order_service


class OrderViewSet(ServiceAPIMixin, GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all writes go through the
    service layer.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = [
        "created_at",
        "order_date",
        "expected_delivery_date",
        "total_amount",
        "status",
        "priority",
    ]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    def get_throttles(self) -> list[BaseThrottle]:
        """Per-action throttling scopes."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "search"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return OrderDjangoRepository().queryset()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = {
            key: value
            for key, value in serializer.validated_data.items()
            if value is not None
        }
        if not data.get("store_code"):
            data.pop("store_code", None)

        return self.run(
            lambda: self._service.create_order(CreateOrderDTO(**data), self.get_actor()),
            serializer_class=OrderSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, stage, priority, customer, store, dates) is
        handled by ``OrderFilter``; ordering by ``OrderingFilter``.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(OrderListSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        return self.run(
            lambda: self._service.get_order(str(pk)),
            serializer_class=OrderSerializer,
        )

    @action(detail=False, methods=["get"], url_path=r"number/(?P<order_number>ORD-[A-Za-z0-9]+-\d{8}-\d{3})")
    def by_number(self, request: Request, order_number: str) -> Response:
        """GET /api/v1/orders/number/{order_number}/"""
        return self.run(
            lambda: self._service.get_by_number(order_number),
            serializer_class=OrderSerializer,
        )

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        """GET /api/v1/orders/search/?q=ORD-KCH"""
        return self.run(
            lambda: self._service.search_orders(request.query_params.get("q", "")),
            serializer_class=OrderListSerializer,
            many=True,
        )

    @action(detail=False, methods=["get"], url_path="workflow-stats")
    def workflow_stats(self, request: Request) -> Response:
        """GET /api/v1/orders/workflow-stats/"""
        return self.run(self._service.get_workflow_stats)

    @action(detail=True, methods=["get"])
    def history(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/history/"""
        return self.run(
            lambda: self._service.get_status_history(str(pk)),
            serializer_class=StatusHistorySerializer,
            many=True,
        )

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Body: ``{"status": ..., "notes": ..., "expected_status": ...}``.
        """
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def operation() -> Order:
            dto = StatusUpdateDTO(**serializer.validated_data)
            return self._service.update_status(
                str(pk),
                dto.status,
                self.get_actor(),
                notes=dto.notes,
                expected_status=dto.expected_status,
            )

        return self.run(operation, serializer_class=OrderSerializer)

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/"""
        serializer = NotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return self.run(
            lambda: self._service.cancel_order(
                str(pk),
                self.get_actor(),
                notes=data["notes"],
                expected_status=data.get("expected_status"),
            ),
            serializer_class=OrderSerializer,
        )

    @action(detail=True, methods=["post"])
    def complete(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/complete/"""
        serializer = NotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._service.complete_order(
                str(pk), self.get_actor(), notes=serializer.validated_data["notes"]
            ),
            serializer_class=OrderSerializer,
        )

    @action(detail=True, methods=["post"])
    def fitting(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/fitting/"""
        serializer = ScheduleFittingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def operation() -> Order:
            dto = ScheduleFittingDTO(**serializer.validated_data)
            return self._service.schedule_fitting(
                str(pk), dto.fitting_date, self.get_actor(), notes=dto.notes
            )

        return self.run(operation, serializer_class=OrderSerializer)

    @action(detail=True, methods=["post"])
    def payments(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/payments/"""
        serializer = PaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def operation() -> Order:
            dto = PaymentDTO(**serializer.validated_data)
            return self._service.record_payment(str(pk), dto.amount, self.get_actor())

        return self.run(operation, serializer_class=OrderSerializer)
