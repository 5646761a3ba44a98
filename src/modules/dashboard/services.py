"""Dashboard statistics.

Read-only: every figure is computed from the order and customer tables
at request time.  Day boundaries follow the configured local time zone.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.utils import timezone

from modules.orders.constants import OPEN_STATUSES, OrderStatus, WorkflowStage

if TYPE_CHECKING:
    from modules.dashboard.repositories.interfaces import IDashboardRepository
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

RECENT_ORDERS_LIMIT = 10
DAILY_SALES_DAYS = 7


class DashboardService:
    def __init__(
        self,
        dashboard_repository: IDashboardRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._repo = dashboard_repository
        self._order_repo = order_repository

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        today = timezone.localtime(now or timezone.now()).date()
        start_of_today = timezone.make_aware(datetime.combine(today, time.min))
        first_day = today - timedelta(days=DAILY_SALES_DAYS - 1)

        by_status = self._order_repo.count_by("status")
        by_stage = self._order_repo.count_by("workflow_stage")
        daily = self._repo.daily_advance_totals(
            timezone.make_aware(datetime.combine(first_day, time.min))
        )

        stats = {
            "total_orders": self._repo.count_orders(),
            "pending_orders": self._repo.count_orders(OPEN_STATUSES),
            "total_customers": self._repo.count_customers(),
            "today_revenue": self._repo.advance_paid_between(
                start_of_today, start_of_today + timedelta(days=1)
            ),
            "recent_orders": self._repo.recent_orders(RECENT_ORDERS_LIMIT),
            "orders_by_status": {
                value: by_status.get(value, 0) for value in OrderStatus.values
            },
            "orders_by_workflow_stage": {
                "unassigned": by_stage.get(None, 0),
                **{value: by_stage.get(value, 0) for value in WorkflowStage.values},
            },
            "daily_sales": [
                {
                    "date": day,
                    "order_count": daily.get(day, {}).get("order_count", 0),
                    "advance_total": daily.get(day, {}).get("advance_total", Decimal("0.00")),
                }
                for day in (first_day + timedelta(days=offset) for offset in range(DAILY_SALES_DAYS))
            ],
        }
        logger.info(
            "dashboard.stats_computed",
            total_orders=stats["total_orders"],
            pending_orders=stats["pending_orders"],
        )
        return stats

    def get_pending_orders(self) -> List[Order]:
        """Open orders, the most urgent delivery first."""
        return self._repo.open_orders(OPEN_STATUSES)
