"""Tailor service layer.

Tailor onboarding, profile maintenance and availability look-ups.  Load
counters are changed by the assignment engine, not here.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.identifiers import generate_tailor_code
from modules.staff.exceptions import StaffUserNotFound
from modules.tailors.exceptions import TailorAlreadyExists, TailorNotFound
from modules.tailors.models import Tailor, TailorPerformance

if TYPE_CHECKING:
    from modules.staff.repositories.interfaces import IStaffRepository
    from modules.tailors.dtos import CreateTailorDTO, UpdateTailorDTO
    from modules.tailors.repositories.interfaces import ITailorRepository

logger = structlog.get_logger(__name__)

_PROFILE_FIELDS = (
    "specializations",
    "skill_level",
    "hourly_rate",
    "max_concurrent_orders",
    "is_available",
)


class TailorService:
    def __init__(
        self,
        tailor_repository: ITailorRepository,
        staff_repository: IStaffRepository,
    ) -> None:
        self._repo = tailor_repository
        self._staff_repo = staff_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_tailor(self, dto: CreateTailorDTO) -> Tailor:
        """Onboard a staff user as a tailor under a fresh ``TLR####`` code.

        Raises:
            StaffUserNotFound: the staff user does not exist.
            TailorAlreadyExists: the user already has a tailor profile.
            IdentifierSpaceExhausted: no free tailor code was found.
        """
        user = self._staff_repo.get_by_id(str(dto.user_id))
        if not user:
            raise StaffUserNotFound(f"Staff user {dto.user_id} not found.")
        if self._repo.get_by_user(str(user.id)):
            raise TailorAlreadyExists(f"{user.username} already has a tailor profile.")

        tailor = Tailor(
            user=user,
            tailor_code=generate_tailor_code(self._repo.code_exists),
            specializations=list(dto.specializations),
            skill_level=dto.skill_level,
            hourly_rate=dto.hourly_rate,
            max_concurrent_orders=dto.max_concurrent_orders,
            is_available=dto.is_available,
        )
        self._repo.save(tailor)
        logger.info("tailor.created", tailor_id=str(tailor.id), tailor_code=tailor.tailor_code)
        return tailor

    @transaction.atomic
    def update_tailor(self, tailor_id: str, dto: UpdateTailorDTO) -> Tailor:
        tailor = self._repo.get_for_update(tailor_id)
        if not tailor:
            raise TailorNotFound(f"Tailor {tailor_id} not found.")

        for field in _PROFILE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(tailor, field, value)
        self._repo.save(tailor)
        logger.info("tailor.updated", tailor_id=str(tailor.id))
        return tailor

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_tailor(self, tailor_id: str) -> Tailor:
        tailor = self._repo.get_by_id(tailor_id)
        if not tailor:
            raise TailorNotFound(f"Tailor {tailor_id} not found.")
        return tailor

    def get_by_user(self, user_id: str) -> Tailor:
        tailor = self._repo.get_by_user(user_id)
        if not tailor:
            raise TailorNotFound(f"No tailor profile for staff user {user_id}.")
        return tailor

    def list_tailors(self, filters: Optional[Dict[str, Any]] = None) -> List[Tailor]:
        return self._repo.list(filters)

    def get_available_tailors(self) -> List[Tailor]:
        """Available tailors ordered by ascending current load."""
        return self._repo.available()

    def get_performance(
        self, tailor_id: str, month_year: Optional[date] = None
    ) -> List[TailorPerformance]:
        if not self._repo.get_by_id(tailor_id):
            raise TailorNotFound(f"Tailor {tailor_id} not found.")
        return self._repo.performance(tailor_id, month_year)
