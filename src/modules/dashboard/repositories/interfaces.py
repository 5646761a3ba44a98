"""Read-only aggregations backing the dashboard."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from modules.orders.models import Order


class IDashboardRepository(ABC):
    @abstractmethod
    def count_orders(self, statuses: Optional[Iterable[str]] = None) -> int:
        """Number of orders, optionally restricted to ``statuses``."""

    @abstractmethod
    def count_customers(self) -> int:
        """Number of registered customers."""

    @abstractmethod
    def advance_paid_between(self, start: datetime, end: datetime) -> Decimal:
        """Sum of ``advance_paid`` over orders created in ``[start, end)``."""

    @abstractmethod
    def recent_orders(self, limit: int) -> List[Order]:
        """Latest orders, newest first."""

    @abstractmethod
    def daily_advance_totals(self, since: datetime) -> Dict[date, Dict[str, object]]:
        """Per local day since ``since``: order count and advance total."""

    @abstractmethod
    def open_orders(self, statuses: Iterable[str]) -> List[Order]:
        """Orders in ``statuses``, earliest expected delivery first."""
