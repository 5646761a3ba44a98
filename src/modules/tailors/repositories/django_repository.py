"""Django ORM implementation of the tailor repository."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.tailors.models import Tailor, TailorPerformance
from modules.tailors.repositories.interfaces import ITailorRepository

logger = structlog.get_logger(__name__)


class TailorDjangoRepository(ITailorRepository):
    def get_by_id(self, id: str) -> Optional[Tailor]:
        try:
            return Tailor.objects.select_related("user").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def locking_queryset(self):
        # The staff user row stays unlocked.
        return Tailor.objects.select_for_update(of=("self",)).select_related("user")

    def get_for_update(self, id: str) -> Optional[Tailor]:
        try:
            return self.locking_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_user(self, user_id: str) -> Optional[Tailor]:
        try:
            return Tailor.objects.select_related("user").filter(user_id=user_id).first()
        except (ValueError, ValidationError):
            return None

    def code_exists(self, tailor_code: str) -> bool:
        return Tailor.objects.filter(tailor_code=tailor_code).exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Tailor]:
        queryset = Tailor.objects.select_related("user")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def available(self) -> List[Tailor]:
        return list(
            Tailor.objects.select_related("user")
            .filter(is_available=True)
            .order_by("current_order_count", "created_at")
        )

    def save(self, entity: Tailor) -> Tailor:
        entity.save()
        logger.info(
            "tailor.saved",
            tailor_id=str(entity.id),
            current_order_count=entity.current_order_count,
        )
        return entity

    def performance(
        self, tailor_id: str, month_year: Optional[date] = None
    ) -> List[TailorPerformance]:
        queryset = TailorPerformance.objects.filter(tailor_id=tailor_id)
        if month_year is not None:
            queryset = queryset.filter(month_year=month_year)
        return list(queryset.order_by("-month_year"))

    def save_performance(
        self, tailor: Tailor, month_year: date, values: Dict[str, Any]
    ) -> TailorPerformance:
        row, created = TailorPerformance.objects.update_or_create(
            tailor=tailor, month_year=month_year, defaults=values
        )
        logger.info(
            "tailor.performance_saved",
            tailor_id=str(tailor.id),
            month_year=month_year.isoformat(),
            created=created,
        )
        return row
