"""Measurement repositories package."""

from modules.measurements.repositories.django_repository import (
    MeasurementDjangoRepository,
)
from modules.measurements.repositories.interfaces import IMeasurementRepository

__all__ = ["IMeasurementRepository", "MeasurementDjangoRepository"]
