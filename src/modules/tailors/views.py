"""Tailor API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.production.serializers import AssignmentSerializer
from modules.production.services import build_assignment_service
from modules.staff.repositories import StaffDjangoRepository
from modules.tailors.dtos import CreateTailorDTO, UpdateTailorDTO
from modules.tailors.models import Tailor
from modules.tailors.performance import parse_month
from modules.tailors.repositories import TailorDjangoRepository
from modules.tailors.serializers import (
    TailorInputSerializer,
    TailorPerformanceSerializer,
    TailorSerializer,
)
from modules.tailors.services import TailorService

_TRUTHY = {"1", "true", "yes"}


class TailorViewSet(ServiceAPIMixin, GenericViewSet):
    queryset = Tailor.objects.none()
    serializer_class = TailorSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = TailorService(TailorDjangoRepository(), StaffDjangoRepository())

    def create(self, request: Request) -> Response:
        """POST /api/v1/tailors/"""
        serializer = TailorInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._service.create_tailor(CreateTailorDTO(**serializer.validated_data)),
            serializer_class=TailorSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/tailors/?available=true"""
        filters = {}
        available = request.query_params.get("available")
        if available is not None:
            filters["is_available"] = available.lower() in _TRUTHY
        tailors = self._service.list_tailors(filters)
        page = self.paginate_queryset(tailors)
        return self.get_paginated_response(TailorSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return self.run(
            lambda: self._service.get_tailor(str(pk)),
            serializer_class=TailorSerializer,
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/tailors/{pk}/"""
        serializer = TailorInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = {
            key: value for key, value in serializer.validated_data.items() if key != "user_id"
        }
        return self.run(
            lambda: self._service.update_tailor(str(pk), UpdateTailorDTO(**data)),
            serializer_class=TailorSerializer,
        )

    @action(detail=False, methods=["get"])
    def available(self, request: Request) -> Response:
        """GET /api/v1/tailors/available/ (least loaded first)"""
        return self.run(
            self._service.get_available_tailors,
            serializer_class=TailorSerializer,
            many=True,
        )

    @action(detail=True, methods=["get"])
    def assignments(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/tailors/{pk}/assignments/?active=true"""
        active_only = request.query_params.get("active", "").lower() in _TRUTHY
        return self.run(
            lambda: build_assignment_service().list_tailor_assignments(
                str(pk), active_only=active_only
            ),
            serializer_class=AssignmentSerializer,
            many=True,
        )

    @action(detail=True, methods=["get"])
    def performance(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/tailors/{pk}/performance/?month=2026-01"""
        month = request.query_params.get("month")
        return self.run(
            lambda: self._service.get_performance(
                str(pk), parse_month(month) if month else None
            ),
            serializer_class=TailorPerformanceSerializer,
            many=True,
        )
