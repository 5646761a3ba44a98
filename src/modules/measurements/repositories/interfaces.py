"""Measurement repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.measurements.models import CustomerMeasurement


class IMeasurementRepository(IRepository["CustomerMeasurement"]):
    @abstractmethod
    def latest_for_customer(self, customer_id: str) -> Optional[CustomerMeasurement]:
        """Most recent measurement record of a customer."""

    @abstractmethod
    def history_for_customer(self, customer_id: str) -> List[CustomerMeasurement]:
        """All measurement records of a customer, newest first."""
