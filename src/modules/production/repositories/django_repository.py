"""Django ORM implementations of the production repositories."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from modules.production.constants import ACTIVE_ASSIGNMENT_STATUSES, AssignmentStatus
from modules.production.models import OrderAssignment, QualityCheck
from modules.production.repositories.interfaces import (
    IAssignmentRepository,
    IQualityCheckRepository,
)

logger = structlog.get_logger(__name__)


class AssignmentDjangoRepository(IAssignmentRepository):
    def _queryset(self) -> QuerySet[OrderAssignment]:
        return OrderAssignment.objects.select_related(
            "order", "tailor", "tailor__user", "assigned_by"
        )

    def get_by_id(self, id: str) -> Optional[OrderAssignment]:
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[OrderAssignment]:
        try:
            return OrderAssignment.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def active_for_order(self, order_id: str) -> Optional[OrderAssignment]:
        return (
            OrderAssignment.objects.select_for_update()
            .filter(order_id=order_id, status__in=ACTIVE_ASSIGNMENT_STATUSES)
            .first()
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderAssignment]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_tailor(
        self, tailor_id: str, active_only: bool = False
    ) -> List[OrderAssignment]:
        queryset = self._queryset().filter(tailor_id=tailor_id)
        if active_only:
            queryset = queryset.filter(status__in=ACTIVE_ASSIGNMENT_STATUSES)
        return list(queryset)

    def completed_between(
        self, tailor_id: str, start: datetime, end: datetime
    ) -> List[OrderAssignment]:
        return list(
            OrderAssignment.objects.select_related("order").filter(
                tailor_id=tailor_id,
                status=AssignmentStatus.COMPLETED,
                completed_at__gte=start,
                completed_at__lt=end,
                released=False,
            )
        )

    def save(self, entity: OrderAssignment) -> OrderAssignment:
        entity.save()
        logger.info(
            "assignment.saved",
            assignment_id=str(entity.id),
            order_id=str(entity.order_id),
            status=entity.status,
        )
        return entity


class QualityCheckDjangoRepository(IQualityCheckRepository):
    def _queryset(self) -> QuerySet[QualityCheck]:
        return QualityCheck.objects.select_related("order", "tailor", "checked_by")

    def get_by_id(self, id: str) -> Optional[QualityCheck]:
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[QualityCheck]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_order(self, order_id: str) -> List[QualityCheck]:
        return list(self._queryset().filter(order_id=order_id))

    def for_tailor_between(
        self, tailor_id: str, start: datetime, end: datetime
    ) -> List[QualityCheck]:
        return list(
            QualityCheck.objects.filter(
                tailor_id=tailor_id, check_date__gte=start, check_date__lt=end
            )
        )

    def save(self, entity: QualityCheck) -> QualityCheck:
        entity.save()
        logger.info(
            "quality_check.saved",
            quality_check_id=str(entity.id),
            order_id=str(entity.order_id),
            passed=entity.passed,
        )
        return entity
