"""Unit tests for the tailor load counters and running quality rating."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.tailors.models import Tailor

pytestmark = pytest.mark.unit


def _tailor(**overrides) -> Tailor:
    values = {"tailor_code": "TLR0100", "max_concurrent_orders": 2}
    values.update(overrides)
    return Tailor(**values)


class TestLoadCounters:
    def test_capacity(self):
        tailor = _tailor()
        assert tailor.has_capacity
        tailor.take_order()
        tailor.take_order()
        assert tailor.current_order_count == 2
        assert not tailor.has_capacity

    def test_release_after_completion_counts_it(self):
        tailor = _tailor(current_order_count=1)
        tailor.release_order(completed=True)
        assert tailor.current_order_count == 0
        assert tailor.total_orders_completed == 1

    def test_release_after_cancellation_does_not_count(self):
        tailor = _tailor(current_order_count=1)
        tailor.release_order(completed=False)
        assert tailor.current_order_count == 0
        assert tailor.total_orders_completed == 0

    def test_count_never_goes_negative(self):
        tailor = _tailor(current_order_count=0)
        tailor.release_order(completed=False)
        assert tailor.current_order_count == 0


class TestQualityRating:
    def test_running_mean(self):
        tailor = _tailor()
        tailor.add_quality_score(Decimal("4.00"))
        tailor.add_quality_score(Decimal("3.00"))
        tailor.add_quality_score(Decimal("5.00"))
        assert tailor.quality_rating == Decimal("4.00")
        assert tailor.rated_checks_count == 3

    def test_rounded_to_cents(self):
        tailor = _tailor()
        tailor.add_quality_score(Decimal("4.25"))
        tailor.add_quality_score(Decimal("3.50"))
        tailor.add_quality_score(Decimal("3.50"))
        assert tailor.quality_rating == Decimal("3.75")

    def test_never_above_five(self):
        tailor = _tailor(quality_rating=Decimal("5.00"), rated_checks_count=4)
        tailor.add_quality_score(Decimal("5.00"))
        assert tailor.quality_rating == Decimal("5.00")
