"""Django ORM implementation of the staff repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.staff.models import StaffUser
from modules.staff.repositories.interfaces import IStaffRepository

logger = structlog.get_logger(__name__)


class StaffDjangoRepository(IStaffRepository):
    def get_by_id(self, id: str) -> Optional[StaffUser]:
        try:
            return StaffUser.objects.select_related("store").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[StaffUser]:
        queryset = StaffUser.objects.select_related("store")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: StaffUser) -> StaffUser:
        entity.save()
        logger.info("staff.saved", staff_id=str(entity.id), role=entity.role)
        return entity

    def get_by_username(self, username: str) -> Optional[StaffUser]:
        return StaffUser.objects.filter(username=username).first()
