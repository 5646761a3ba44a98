"""Background tasks of the tailors module."""

from typing import Optional

import structlog
from celery import shared_task

logger = structlog.get_logger(__name__)


@shared_task(name="tailors.rollup_tailor_performance")
def rollup_tailor_performance(month: Optional[str] = None) -> dict:
    """Recompute ``oms_tailor_performance`` for ``month`` (``YYYY-MM``).

    Defaults to the current month.  Safe to run repeatedly.
    """
    from modules.production.repositories import (
        AssignmentDjangoRepository,
        QualityCheckDjangoRepository,
    )
    from modules.tailors.performance import PerformanceRollupService, parse_month
    from modules.tailors.repositories import TailorDjangoRepository

    month_year = parse_month(month)
    logger.info("tailor.rollup_started", month=month_year.strftime("%Y-%m"))
    service = PerformanceRollupService(
        tailor_repository=TailorDjangoRepository(),
        assignment_repository=AssignmentDjangoRepository(),
        quality_check_repository=QualityCheckDjangoRepository(),
    )
    rows = service.rollup(month_year)
    return {"month": month_year.strftime("%Y-%m"), "tailors": len(rows)}
