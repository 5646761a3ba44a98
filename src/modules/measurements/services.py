"""Measurement service layer.

A new record is appended for every fitting session; ``get_current``
returns the latest.  ``update_measurements`` is the only way an existing
record changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerNotFound
from modules.measurements.constants import MEASUREMENT_FIELDS
from modules.measurements.exceptions import MeasurementNotFound
from modules.measurements.models import CustomerMeasurement

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.measurements.dtos import MeasurementDTO
    from modules.measurements.repositories.interfaces import IMeasurementRepository

logger = structlog.get_logger(__name__)


class MeasurementService:
    def __init__(
        self,
        measurement_repository: IMeasurementRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._repo = measurement_repository
        self._customer_repo = customer_repository

    @transaction.atomic
    def record_measurements(
        self, customer_id: str, dto: MeasurementDTO
    ) -> CustomerMeasurement:
        customer = self._customer_repo.get_by_id(customer_id)
        if not customer:
            raise CustomerNotFound(f"Customer {customer_id} not found.")

        measurement = CustomerMeasurement(customer=customer, unit=dto.unit, notes=dto.notes)
        for field in MEASUREMENT_FIELDS:
            setattr(measurement, field, getattr(dto, field))
        self._repo.save(measurement)

        logger.info(
            "measurement.recorded",
            measurement_id=str(measurement.id),
            customer_id=str(customer.id),
        )
        return measurement

    @transaction.atomic
    def update_measurements(
        self, measurement_id: str, dto: MeasurementDTO
    ) -> CustomerMeasurement:
        """Overwrite only the values present in the request."""
        measurement = self._repo.get_by_id(measurement_id)
        if not measurement:
            raise MeasurementNotFound(f"Measurement {measurement_id} not found.")

        for field in dto.model_fields_set:
            setattr(measurement, field, getattr(dto, field))
        self._repo.save(measurement)
        logger.info("measurement.updated", measurement_id=str(measurement.id))
        return measurement

    def get_current(self, customer_id: str) -> CustomerMeasurement:
        measurement = self._repo.latest_for_customer(customer_id)
        if not measurement:
            raise MeasurementNotFound(
                f"No measurements recorded for customer {customer_id}."
            )
        return measurement

    def get_measurement(self, measurement_id: str) -> CustomerMeasurement:
        measurement = self._repo.get_by_id(measurement_id)
        if not measurement:
            raise MeasurementNotFound(f"Measurement {measurement_id} not found.")
        return measurement

    def list_history(self, customer_id: str) -> List[CustomerMeasurement]:
        if not self._customer_repo.get_by_id(customer_id):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        return self._repo.history_for_customer(customer_id)
