"""Assignment and quality-check API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.production.dtos import AssignOrderDTO, QualityCheckDTO
from modules.production.models import OrderAssignment, QualityCheck
from modules.production.serializers import (
    AssignmentFilterSerializer,
    AssignmentSerializer,
    AssignOrderSerializer,
    CompleteAssignmentSerializer,
    QualityCheckInputSerializer,
    QualityCheckSerializer,
)
from modules.production.services import (
    build_assignment_service,
    build_quality_check_service,
)


class AssignmentViewSet(ServiceAPIMixin, GenericViewSet):
    queryset = OrderAssignment.objects.none()
    serializer_class = AssignmentSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_assignment_service()

    def list(self, request: Request) -> Response:
        """GET /api/v1/assignments/?status=in_progress&tailor=<id>&order=<id>"""
        params = AssignmentFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        filters = {
            f"{key}_id" if key in {"tailor", "order"} else key: value
            for key, value in params.validated_data.items()
        }
        assignments = self._service.list_assignments(filters)
        page = self.paginate_queryset(assignments)
        return self.get_paginated_response(AssignmentSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return self.run(
            lambda: self._service.get_assignment(str(pk)),
            serializer_class=AssignmentSerializer,
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/assignments/"""
        serializer = AssignOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        def operation() -> OrderAssignment:
            dto = AssignOrderDTO(**serializer.validated_data)
            return self._service.assign_order_to_tailor(
                str(dto.order_id),
                str(dto.tailor_id),
                self.get_actor(),
                estimated_time=dto.estimated_completion_time,
                notes=dto.notes,
            )

        return self.run(
            operation,
            serializer_class=AssignmentSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def start(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/assignments/{pk}/start/"""
        return self.run(
            lambda: self._service.start_assignment(str(pk), self.get_actor()),
            serializer_class=AssignmentSerializer,
        )

    @action(detail=True, methods=["post"])
    def complete(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/assignments/{pk}/complete/"""
        serializer = CompleteAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._service.complete_stitching(
                str(pk), self.get_actor(), notes=serializer.validated_data["notes"]
            ),
            serializer_class=AssignmentSerializer,
        )


class QualityCheckViewSet(ServiceAPIMixin, GenericViewSet):
    """Quality checks are append-only: no update or destroy."""

    queryset = QualityCheck.objects.none()
    serializer_class = QualityCheckSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_quality_check_service()

    def create(self, request: Request) -> Response:
        """POST /api/v1/quality-checks/"""
        serializer = QualityCheckInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._service.perform_quality_check(
                QualityCheckDTO(**serializer.validated_data), self.get_actor()
            ),
            serializer_class=QualityCheckSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/quality-checks/?order=<id>"""
        order_id = request.query_params.get("order")
        if not order_id:
            return self.failure(
                "Query parameter 'order' is required.",
                "validation_error",
                status.HTTP_400_BAD_REQUEST,
            )
        return self.run(
            lambda: self._service.list_order_quality_checks(order_id),
            serializer_class=QualityCheckSerializer,
            many=True,
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        return self.run(
            lambda: self._service.get_quality_check(str(pk)),
            serializer_class=QualityCheckSerializer,
        )
