"""Staff repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.staff.models import StaffUser


class IStaffRepository(IRepository["StaffUser"]):
    """Repository contract for staff users."""

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[StaffUser]:
        """Retrieve a staff user by username."""
