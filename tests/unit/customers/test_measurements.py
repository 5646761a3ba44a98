"""Unit tests for MeasurementService."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.customers.exceptions import CustomerNotFound
from modules.customers.repositories import CustomerDjangoRepository
from modules.measurements.constants import MeasurementUnit
from modules.measurements.dtos import MeasurementDTO
from modules.measurements.exceptions import MeasurementNotFound
from modules.measurements.repositories import MeasurementDjangoRepository
from modules.measurements.services import MeasurementService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return MeasurementService(
        measurement_repository=MeasurementDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )


def test_latest_record_is_current(service, customer):
    service.record_measurements(str(customer.id), MeasurementDTO(top_fl=Decimal("29")))
    newer = service.record_measurements(
        str(customer.id), MeasurementDTO(top_fl=Decimal("30"), unit=MeasurementUnit.CM)
    )

    current = service.get_current(str(customer.id))
    assert current.id == newer.id
    assert current.unit == MeasurementUnit.CM
    assert len(service.list_history(str(customer.id))) == 2


def test_no_measurements_yet(service, customer):
    with pytest.raises(MeasurementNotFound):
        service.get_current(str(customer.id))


def test_unknown_customer(service):
    with pytest.raises(CustomerNotFound):
        service.record_measurements(str(uuid4()), MeasurementDTO())


def test_update_touches_only_given_fields(service, measurement):
    updated = service.update_measurements(
        str(measurement.id), MeasurementDTO(top_sh=Decimal("17.50"))
    )
    assert updated.top_sh == Decimal("17.50")
    assert updated.top_fl == Decimal("29.50")


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        MeasurementDTO(top_fl=Decimal("-1"))
