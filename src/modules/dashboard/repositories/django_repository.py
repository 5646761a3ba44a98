"""Django ORM implementation of the dashboard aggregations."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from modules.customers.models import Customer
from modules.dashboard.repositories.interfaces import IDashboardRepository
from modules.orders.models import Order


class DashboardDjangoRepository(IDashboardRepository):
    def count_orders(self, statuses: Optional[Iterable[str]] = None) -> int:
        queryset = Order.objects.all()
        if statuses is not None:
            queryset = queryset.filter(status__in=list(statuses))
        return queryset.count()

    def count_customers(self) -> int:
        return Customer.objects.count()

    def advance_paid_between(self, start: datetime, end: datetime) -> Decimal:
        total = Order.objects.filter(created_at__gte=start, created_at__lt=end).aggregate(
            total=Sum("advance_paid")
        )["total"]
        return total or Decimal("0.00")

    def recent_orders(self, limit: int) -> List[Order]:
        return list(
            Order.objects.select_related("customer", "store").order_by("-created_at", "-id")[
                :limit
            ]
        )

    def daily_advance_totals(self, since: datetime) -> Dict[date, Dict[str, object]]:
        rows = (
            Order.objects.filter(created_at__gte=since)
            .annotate(day=TruncDate("created_at"))
            .order_by()
            .values("day")
            .annotate(order_count=Count("id"), advance_total=Sum("advance_paid"))
        )
        return {
            row["day"]: {
                "order_count": row["order_count"],
                "advance_total": row["advance_total"] or Decimal("0.00"),
            }
            for row in rows
        }

    def open_orders(self, statuses: Iterable[str]) -> List[Order]:
        return list(
            Order.objects.select_related("customer", "store", "assigned_tailor")
            .filter(status__in=list(statuses))
            .order_by("expected_delivery_date", "id")
        )
