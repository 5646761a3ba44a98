"""Expected delivery date estimation.

Lead time is a base number of days per order type scaled by a priority
multiplier and rounded up.  Dates are plain calendar arithmetic: no
weekends, holidays or shop capacity are taken into account.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from modules.orders.constants import OrderPriority, OrderType

BASE_LEAD_DAYS: dict[str, int] = {
    OrderType.ALTERATIONS: 3,
    OrderType.NEW_STITCHING: 14,
}
DEFAULT_LEAD_DAYS = 7

PRIORITY_MULTIPLIERS: dict[str, Decimal] = {
    OrderPriority.URGENT: Decimal("0.5"),
    OrderPriority.HIGH: Decimal("0.7"),
    OrderPriority.LOW: Decimal("1.5"),
}
DEFAULT_MULTIPLIER = Decimal("1")


def lead_time_days(order_type: str, priority: Optional[str] = None) -> int:
    """``ceil(base_days(order_type) * multiplier(priority))``.

    >>> lead_time_days("new_stitching", "high")
    10
    >>> lead_time_days("alterations", "low")
    5
    """
    base = BASE_LEAD_DAYS.get(order_type, DEFAULT_LEAD_DAYS)
    multiplier = PRIORITY_MULTIPLIERS.get(priority or "", DEFAULT_MULTIPLIER)
    return math.ceil(base * multiplier)


def calculate_delivery_date(
    order_type: str,
    priority: Optional[str] = None,
    now: Optional[datetime] = None,
) -> datetime:
    """Return ``now`` plus the lead time for ``order_type``/``priority``."""
    start = now if now is not None else timezone.now()
    return start + timedelta(days=lead_time_days(order_type, priority))
