"""Repository contracts of the production engine."""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.production.models import OrderAssignment, QualityCheck


class IAssignmentRepository(IRepository["OrderAssignment"]):
    @abstractmethod
    def get_for_update(self, id: str) -> Optional[OrderAssignment]:
        """Retrieve an assignment with a row-level lock."""

    @abstractmethod
    def active_for_order(self, order_id: str) -> Optional[OrderAssignment]:
        """The locked active assignment of an order, if any."""

    @abstractmethod
    def list_for_tailor(
        self, tailor_id: str, active_only: bool = False
    ) -> List[OrderAssignment]:
        """Assignments of a tailor, newest first."""

    @abstractmethod
    def completed_between(
        self, tailor_id: str, start: datetime, end: datetime
    ) -> List[OrderAssignment]:
        """Stitching completed by a tailor in ``[start, end)``.

        Assignments released by an order cancellation are not included.
        """


class IQualityCheckRepository(IRepository["QualityCheck"]):
    @abstractmethod
    def list_for_order(self, order_id: str) -> List[QualityCheck]:
        """Quality checks of an order, newest first."""

    @abstractmethod
    def for_tailor_between(
        self, tailor_id: str, start: datetime, end: datetime
    ) -> List[QualityCheck]:
        """Checks of a tailor's work recorded in ``[start, end)``."""
