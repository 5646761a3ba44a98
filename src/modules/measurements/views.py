"""Measurement API views.

Recording and listing happen under ``/customers/{id}/measurements/``;
this viewset covers access to a single record.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.customers.repositories import CustomerDjangoRepository
from modules.measurements.dtos import MeasurementDTO
from modules.measurements.models import CustomerMeasurement
from modules.measurements.repositories import MeasurementDjangoRepository
from modules.measurements.serializers import (
    MeasurementInputSerializer,
    MeasurementSerializer,
)
from modules.measurements.services import MeasurementService


class MeasurementViewSet(ServiceAPIMixin, GenericViewSet):
    queryset = CustomerMeasurement.objects.none()
    serializer_class = MeasurementSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = MeasurementService(
            measurement_repository=MeasurementDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/measurements/{pk}/"""
        return self.run(
            lambda: self._service.get_measurement(str(pk)),
            serializer_class=MeasurementSerializer,
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/measurements/{pk}/"""
        serializer = MeasurementInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._service.update_measurements(
                str(pk), MeasurementDTO(**serializer.validated_data)
            ),
            serializer_class=MeasurementSerializer,
        )
