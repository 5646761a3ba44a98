"""Unit tests for the monthly performance roll-up."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.utils import timezone

from modules.core.exceptions import ValidationFailed
from modules.tailors.performance import month_bounds, parse_month, summarize_month

pytestmark = pytest.mark.unit

T0 = timezone.make_aware(datetime(2026, 3, 10, 9, 0))


def _assignment(hours, due_in_hours, started=True):
    completed = T0 + timedelta(hours=hours)
    return SimpleNamespace(
        assigned_at=T0 - timedelta(hours=1),
        started_at=T0 if started else None,
        completed_at=completed,
        order=SimpleNamespace(expected_delivery_date=T0 + timedelta(hours=due_in_hours)),
    )


def _check(score, passed=True):
    return SimpleNamespace(score=Decimal(score), passed=passed)


class TestParseMonth:
    def test_explicit_month(self):
        assert parse_month("2026-02") == date(2026, 2, 1)

    def test_defaults_to_current_month(self):
        assert parse_month(None, now=T0) == date(2026, 3, 1)

    @pytest.mark.parametrize("value", ["2026/02", "2026-13", "march"])
    def test_invalid(self, value):
        with pytest.raises(ValidationFailed):
            parse_month(value)


class TestMonthBounds:
    def test_regular_month(self):
        start, end = month_bounds(date(2026, 3, 1))
        assert timezone.localtime(start).date() == date(2026, 3, 1)
        assert timezone.localtime(end).date() == date(2026, 4, 1)

    def test_december_rolls_over(self):
        _start, end = month_bounds(date(2026, 12, 1))
        assert timezone.localtime(end).date() == date(2027, 1, 1)


class TestSummarizeMonth:
    def test_empty_month(self):
        summary = summarize_month([], [], Decimal("400.00"))
        assert summary.orders_completed == 0
        assert summary.orders_rejected == 0
        assert summary.quality_score == Decimal("0.00")
        assert summary.efficiency_rating == Decimal("0.00")
        assert summary.total_earnings == Decimal("0.00")

    def test_figures(self):
        assignments = [
            _assignment(hours=2, due_in_hours=24),
            _assignment(hours=3, due_in_hours=1),
            _assignment(hours=1, due_in_hours=24, started=False),
        ]
        checks = [_check("4.50"), _check("2.50", passed=False)]

        summary = summarize_month(assignments, checks, Decimal("100.00"))

        assert summary.orders_completed == 3
        assert summary.orders_rejected == 1
        assert summary.quality_score == Decimal("3.50")
        assert summary.efficiency_rating == Decimal("66.67")
        # 2h + 3h + 2h counted from assignment for the unstarted one, at 100/h
        assert summary.total_earnings == Decimal("700.00")

    def test_as_values(self):
        values = summarize_month([], [], Decimal("0")).as_values()
        assert set(values) == {
            "orders_completed",
            "orders_rejected",
            "quality_score",
            "efficiency_rating",
            "total_earnings",
        }
