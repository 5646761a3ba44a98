"""Tailor repository interface."""

from __future__ import annotations

from abc import abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.tailors.models import Tailor, TailorPerformance


class ITailorRepository(IRepository["Tailor"]):
    """Repository contract for tailors and their monthly performance."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Tailor]:
        """Retrieve a tailor with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> Optional[Tailor]:
        """Retrieve the tailor profile of a staff user."""

    @abstractmethod
    def code_exists(self, tailor_code: str) -> bool:
        """Whether a tailor already carries exactly this code."""

    @abstractmethod
    def available(self) -> List[Tailor]:
        """Available tailors, least loaded first."""

    @abstractmethod
    def performance(
        self, tailor_id: str, month_year: Optional[date] = None
    ) -> List[TailorPerformance]:
        """Monthly performance rows of a tailor, newest first."""

    @abstractmethod
    def save_performance(
        self, tailor: Tailor, month_year: date, values: Dict[str, Any]
    ) -> TailorPerformance:
        """Insert or replace the performance row of ``tailor`` for a month."""
