"""Django ORM implementation of the measurement repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.measurements.models import CustomerMeasurement
from modules.measurements.repositories.interfaces import IMeasurementRepository

logger = structlog.get_logger(__name__)


class MeasurementDjangoRepository(IMeasurementRepository):
    def get_by_id(self, id: str) -> Optional[CustomerMeasurement]:
        try:
            return CustomerMeasurement.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[CustomerMeasurement]:
        queryset = CustomerMeasurement.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: CustomerMeasurement) -> CustomerMeasurement:
        entity.save()
        logger.info(
            "measurement.saved",
            measurement_id=str(entity.id),
            customer_id=str(entity.customer_id),
        )
        return entity

    def latest_for_customer(self, customer_id: str) -> Optional[CustomerMeasurement]:
        try:
            return (
                CustomerMeasurement.objects.filter(customer_id=customer_id)
                .order_by("-created_at", "-id")
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def history_for_customer(self, customer_id: str) -> List[CustomerMeasurement]:
        return list(
            CustomerMeasurement.objects.filter(customer_id=customer_id).order_by(
                "-created_at", "-id"
            )
        )
