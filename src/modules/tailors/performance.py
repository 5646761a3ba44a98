"""Monthly tailor performance roll-up.

For one tailor and one calendar month (local time):

- ``orders_completed``: assignments completed in the month.
- ``orders_rejected``: failed quality checks in the month.
- ``quality_score``: mean score of the month's quality checks.
- ``efficiency_rating``: share (%) of completions on or before the
  order's expected delivery date.
- ``total_earnings``: hours worked (start, or assignment when never
  started, to completion) times the tailor's hourly rate.

The roll-up is an upsert, so running it again for the same month
replaces the figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import ValidationFailed

if TYPE_CHECKING:
    from modules.production.repositories.interfaces import (
        IAssignmentRepository,
        IQualityCheckRepository,
    )
    from modules.tailors.repositories.interfaces import ITailorRepository

logger = structlog.get_logger(__name__)

_CENTS = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)


@dataclass(frozen=True)
class MonthSummary:
    orders_completed: int
    orders_rejected: int
    quality_score: Decimal
    efficiency_rating: Decimal
    total_earnings: Decimal

    def as_values(self) -> Dict[str, Any]:
        return {
            "orders_completed": self.orders_completed,
            "orders_rejected": self.orders_rejected,
            "quality_score": self.quality_score,
            "efficiency_rating": self.efficiency_rating,
            "total_earnings": self.total_earnings,
        }


def parse_month(value: Optional[str], now: Optional[datetime] = None) -> date:
    """``"YYYY-MM"`` to the first day of that month; current month if empty."""
    if not value:
        today = timezone.localtime(now or timezone.now()).date()
        return today.replace(day=1)
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError as exc:
        raise ValidationFailed(f"Month must look like YYYY-MM, got {value!r}.") from exc
    return date(parsed.year, parsed.month, 1)


def month_bounds(month_year: date) -> tuple[datetime, datetime]:
    """Aware ``[start, end)`` datetimes of the month in the current time zone."""
    start = datetime(month_year.year, month_year.month, 1)
    if month_year.month == 12:
        end = datetime(month_year.year + 1, 1, 1)
    else:
        end = datetime(month_year.year, month_year.month + 1, 1)
    return timezone.make_aware(start), timezone.make_aware(end)


def summarize_month(
    completed_assignments: Iterable[Any],
    quality_checks: Iterable[Any],
    hourly_rate: Decimal,
) -> MonthSummary:
    """Aggregate one tailor's month.

    ``completed_assignments`` need ``assigned_at``, ``started_at``,
    ``completed_at`` and ``order.expected_delivery_date``;
    ``quality_checks`` need ``passed`` and ``score``.
    """
    assignments = list(completed_assignments)
    checks = list(quality_checks)

    on_time = 0
    seconds = Decimal(0)
    for assignment in assignments:
        began = assignment.started_at or assignment.assigned_at
        seconds += Decimal(
            max((assignment.completed_at - began).total_seconds(), 0)
        )
        if assignment.completed_at <= assignment.order.expected_delivery_date:
            on_time += 1

    efficiency = Decimal(0)
    if assignments:
        efficiency = Decimal(on_time * 100) / Decimal(len(assignments))

    quality = Decimal(0)
    if checks:
        quality = sum((check.score for check in checks), Decimal(0)) / Decimal(len(checks))

    earnings = seconds / _SECONDS_PER_HOUR * hourly_rate
    return MonthSummary(
        orders_completed=len(assignments),
        orders_rejected=sum(1 for check in checks if not check.passed),
        quality_score=quality.quantize(_CENTS, rounding=ROUND_HALF_UP),
        efficiency_rating=efficiency.quantize(_CENTS, rounding=ROUND_HALF_UP),
        total_earnings=earnings.quantize(_CENTS, rounding=ROUND_HALF_UP),
    )


class PerformanceRollupService:
    def __init__(
        self,
        tailor_repository: ITailorRepository,
        assignment_repository: IAssignmentRepository,
        quality_check_repository: IQualityCheckRepository,
    ) -> None:
        self._tailor_repo = tailor_repository
        self._assignment_repo = assignment_repository
        self._check_repo = quality_check_repository

    @transaction.atomic
    def rollup(self, month_year: date) -> List[Any]:
        """Recompute the month for every tailor; return the saved rows."""
        start, end = month_bounds(month_year)
        rows = []
        for tailor in self._tailor_repo.list():
            summary = summarize_month(
                self._assignment_repo.completed_between(str(tailor.id), start, end),
                self._check_repo.for_tailor_between(str(tailor.id), start, end),
                tailor.hourly_rate,
            )
            rows.append(
                self._tailor_repo.save_performance(tailor, month_year, summary.as_values())
            )

        logger.info(
            "tailor.performance_rolled_up",
            month_year=month_year.isoformat(),
            tailor_count=len(rows),
        )
        return rows
