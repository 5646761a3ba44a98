"""Unit tests for expected delivery date estimation."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from django.utils import timezone

from modules.orders.delivery import calculate_delivery_date, lead_time_days

pytestmark = pytest.mark.unit

NOW = timezone.make_aware(datetime(2026, 3, 14, 10, 30))


@pytest.mark.parametrize(
    ("order_type", "priority", "days"),
    [
        ("new_stitching", "medium", 14),
        ("new_stitching", "urgent", 7),
        ("new_stitching", "high", 10),
        ("new_stitching", "low", 21),
        ("alterations", "medium", 3),
        ("alterations", "urgent", 2),
        ("alterations", "high", 3),
        ("alterations", "low", 5),
    ],
)
def test_lead_time_days(order_type, priority, days):
    assert lead_time_days(order_type, priority) == days


def test_missing_priority_uses_base_lead_time():
    assert lead_time_days("new_stitching") == 14


def test_unknown_order_type_defaults_to_a_week():
    assert lead_time_days("embroidery", "medium") == 7


def test_delivery_date_keeps_time_of_day():
    assert calculate_delivery_date("alterations", "low", now=NOW) == NOW + timedelta(days=5)


def test_delivery_date_defaults_to_now():
    before = timezone.now()
    result = calculate_delivery_date("new_stitching", "urgent")
    assert before + timedelta(days=7) <= result <= timezone.now() + timedelta(days=7)
