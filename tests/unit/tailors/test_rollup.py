"""Unit tests for the monthly performance roll-up task."""

from __future__ import annotations

from decimal import Decimal

import pytest
from freezegun import freeze_time

from modules.production.constants import OverallQuality
from modules.production.dtos import QualityCheckDTO
from modules.tailors.models import TailorPerformance
from modules.tailors.tasks import rollup_tailor_performance

pytestmark = pytest.mark.unit


@freeze_time("2026-03-10 06:00:00")
def test_rollup_saves_month_row(
    make_order, tailor, assignment_service, quality_check_service, actor, inspector_actor
):
    order = make_order()
    assignment = assignment_service.assign_order_to_tailor(str(order.id), str(tailor.id), actor)
    assignment_service.complete_stitching(str(assignment.id), actor)
    quality_check_service.perform_quality_check(
        QualityCheckDTO(
            order_id=order.id,
            overall_quality=OverallQuality.REJECTED,
            stitching_quality=2,
            finishing_quality=2,
            measurement_accuracy=2,
            design_adherence=2,
        ),
        inspector_actor,
    )

    result = rollup_tailor_performance("2026-03")

    assert result == {"month": "2026-03", "tailors": 1}
    row = TailorPerformance.objects.get(tailor=tailor)
    assert row.month_year.isoformat() == "2026-03-01"
    assert row.orders_completed == 1
    assert row.orders_rejected == 1
    assert row.quality_score == Decimal("2.00")
    assert row.efficiency_rating == Decimal("100.00")


@freeze_time("2026-03-10 06:00:00")
def test_rollup_is_repeatable(tailor):
    rollup_tailor_performance("2026-03")
    rollup_tailor_performance("2026-03")

    row = TailorPerformance.objects.get(tailor=tailor)
    assert row.orders_completed == 0
    assert TailorPerformance.objects.count() == 1


def test_rollup_defaults_to_current_month(tailor):
    result = rollup_tailor_performance()
    assert result["tailors"] == 1


@freeze_time("2026-03-10 06:00:00")
def test_rollup_ignores_work_released_by_cancellation(
    make_order, tailor, assignment_service, order_service, actor
):
    cancelled = make_order()
    assignment_service.assign_order_to_tailor(str(cancelled.id), str(tailor.id), actor)
    order_service.cancel_order(str(cancelled.id), actor, notes="Customer withdrew")

    finished = make_order()
    assignment = assignment_service.assign_order_to_tailor(str(finished.id), str(tailor.id), actor)
    assignment_service.complete_stitching(str(assignment.id), actor)

    rollup_tailor_performance("2026-03")

    row = TailorPerformance.objects.get(tailor=tailor)
    tailor.refresh_from_db()
    assert row.orders_completed == 1
    assert row.orders_completed == tailor.total_orders_completed
