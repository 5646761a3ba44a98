"""Customer repository interface.

Extends ``IRepository[Customer]`` with the code look-up used by the
identifier generator and the substring search.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_code(self, customer_code: str) -> Optional[Customer]:
        """Retrieve a customer by ``CUST-YYYY-NNNNN`` code."""

    @abstractmethod
    def code_exists(self, customer_code: str) -> bool:
        """Whether a customer already carries exactly this code."""

    @abstractmethod
    def search(self, query: str, limit: int = 50) -> List[Customer]:
        """Case-insensitive substring search over name, phone and email."""

    @abstractmethod
    def append_order_number(self, customer_id: str, order_number: str) -> None:
        """Append an order number to the customer's order history."""

    @abstractmethod
    def with_order_summary(self, customer_id: Optional[str] = None) -> List[Customer]:
        """Customers annotated with order count, last order date and spend."""
