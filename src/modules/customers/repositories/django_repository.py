"""Django ORM implementation of the Customer repository.

Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the service layer decides how a missing entity
is reported.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Count, DecimalField, F, Max, Q, Sum, Value
from django.db.models.functions import Coalesce

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository
from modules.orders.constants import OrderStatus

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"address_city__iexact": "kochi"}
            {"name__icontains": "john"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    def get_by_code(self, customer_code: str) -> Optional[Customer]:
        return Customer.objects.filter(customer_code=customer_code).first()

    def code_exists(self, customer_code: str) -> bool:
        return Customer.objects.filter(customer_code=customer_code).exists()

    def search(self, query: str, limit: int = 50) -> List[Customer]:
        queryset = Customer.objects.filter(
            Q(name__icontains=query)
            | Q(phone__icontains=query)
            | Q(email__icontains=query)
        ).order_by("name")
        return list(queryset[:limit])

    def append_order_number(self, customer_id: str, order_number: str) -> None:
        customer = Customer.objects.select_for_update().get(id=customer_id)
        history = list(customer.order_history or [])
        if order_number not in history:
            history.append(order_number)
            customer.order_history = history
            customer.save(update_fields=["order_history", "updated_at"])

    def with_order_summary(self, customer_id: Optional[str] = None) -> List[Customer]:
        """Customers annotated with ``order_count``, ``last_order_date`` and
        ``total_spent``, most recent buyers first.

        Cancelled orders are counted but add nothing to ``total_spent``.
        """
        queryset = Customer.objects.annotate(
            order_count=Count("orders"),
            last_order_date=Max("orders__order_date"),
            total_spent=Coalesce(
                Sum(
                    "orders__total_amount",
                    filter=~Q(orders__status=OrderStatus.CANCELLED),
                ),
                Value(Decimal("0.00")),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            ),
        ).order_by(F("last_order_date").desc(nulls_last=True), "name")
        try:
            if customer_id is not None:
                queryset = queryset.filter(id=customer_id)
            return list(queryset)
        except (ValueError, ValidationError):
            return []
