"""Unit tests for the dashboard statistics."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from freezegun import freeze_time

from modules.dashboard.repositories import DashboardDjangoRepository
from modules.dashboard.services import DAILY_SALES_DAYS, DashboardService
from modules.orders.constants import OrderPriority
from modules.orders.repositories import OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return DashboardService(DashboardDjangoRepository(), OrderDjangoRepository())


class TestDashboardStats:
    def test_empty_shop(self, service):
        stats = service.get_dashboard_stats()

        assert stats["total_orders"] == 0
        assert stats["pending_orders"] == 0
        assert stats["today_revenue"] == Decimal("0")
        assert stats["recent_orders"] == []
        assert len(stats["daily_sales"]) == DAILY_SALES_DAYS
        assert all(day["order_count"] == 0 for day in stats["daily_sales"])

    def test_counts_and_revenue(self, service, make_order, order_service, actor, customer):
        with freeze_time("2026-03-08 06:00:00"):
            make_order(advance_paid=Decimal("300.00"))
        with freeze_time("2026-03-10 06:00:00"):
            make_order()
            cancelled = make_order(advance_paid=Decimal("0.00"))
            order_service.cancel_order(str(cancelled.id), actor)

            stats = service.get_dashboard_stats()

        assert stats["total_orders"] == 3
        assert stats["pending_orders"] == 2
        assert stats["total_customers"] == 1
        assert stats["today_revenue"] == Decimal("500.00")
        assert stats["orders_by_status"]["cancelled"] == 1
        assert stats["orders_by_workflow_stage"]["unassigned"] == 3
        assert len(stats["recent_orders"]) == 3

        sales = {day["date"]: day for day in stats["daily_sales"]}
        assert stats["daily_sales"][-1]["date"] == date(2026, 3, 10)
        assert stats["daily_sales"][0]["date"] == date(2026, 3, 10) - timedelta(days=6)
        assert sales[date(2026, 3, 10)]["order_count"] == 2
        assert sales[date(2026, 3, 10)]["advance_total"] == Decimal("500.00")
        assert sales[date(2026, 3, 8)]["advance_total"] == Decimal("300.00")
        assert sales[date(2026, 3, 9)]["order_count"] == 0

    def test_pending_orders_most_urgent_first(self, service, make_order, order_service, actor):
        later = make_order(priority=OrderPriority.LOW)
        sooner = make_order(priority=OrderPriority.URGENT)
        order_service.cancel_order(str(make_order().id), actor)

        pending = service.get_pending_orders()

        assert [order.id for order in pending] == [sooner.id, later.id]
