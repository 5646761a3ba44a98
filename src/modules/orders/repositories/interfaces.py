"""Order repository interface.

Extends ``IRepository[Order]`` with the look-ups the order service
needs: row locking, order-number checks, status history and search.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.core.context import ActorContext
    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    ``save`` persists pending domain events to the outbox in the same
    transaction as the order row.
    """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> Optional[Order]:
        """Retrieve an order by its human-readable number."""

    @abstractmethod
    def number_exists(self, order_number: str) -> bool:
        """Whether an order already carries exactly this number."""

    @abstractmethod
    def add_history(
        self,
        order: Order,
        old_status: Optional[str],
        actor: ActorContext,
        notes: str = "",
    ) -> OrderStatusHistory:
        """Append the order's current status to its audit trail."""

    @abstractmethod
    def history(self, order_id: str) -> List[OrderStatusHistory]:
        """Status history of an order, oldest first."""

    @abstractmethod
    def search(self, query: str, limit: int = 50) -> List[Order]:
        """Case-insensitive substring search over order number and customer."""

    @abstractmethod
    def count_by(self, field: str) -> Dict[Optional[str], int]:
        """Number of orders per distinct value of ``field``."""

    @abstractmethod
    def queryset(self) -> QuerySet[Order]:
        """Base queryset for list views (filtering/ordering/pagination)."""
