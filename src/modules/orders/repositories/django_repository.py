"""Django ORM implementation of the Order repository.

Concurrency control on transitions uses ``select_for_update()``: the
service locks the order row before validating a transition, so two
requests against the same order are serialised by the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, QuerySet

from modules.core.models import OutboxEvent
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

if TYPE_CHECKING:
    from modules.core.context import ActorContext

logger = structlog.get_logger(__name__)

_RELATED = ("customer", "store", "assigned_tailor", "created_by")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def queryset(self) -> QuerySet[Order]:
        return Order.objects.select_related(*_RELATED)

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Uses ``select_related`` for the FKs and ``prefetch_related`` for
        the status history.  Returns ``None`` for non-existent or invalid
        IDs.
        """
        try:
            return (
                self.queryset()
                .prefetch_related("status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def locking_queryset(self):
        """Orders with customer and store joined; only the order row is locked."""
        return Order.objects.select_for_update(of=("self",)).select_related(
            "customer", "store"
        )

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self.locking_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_number(self, order_number: str) -> Optional[Order]:
        return (
            self.queryset()
            .prefetch_related("status_history")
            .filter(order_number=order_number)
            .first()
        )

    def number_exists(self, order_number: str) -> bool:
        return Order.objects.filter(order_number=order_number).exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional Django ORM look-ups.

        Examples of valid filters::

            {"status": "ready"}
            {"customer_id": "0191..."}
            {"expected_delivery_date__lte": now}
        """
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def search(self, query: str, limit: int = 50) -> List[Order]:
        queryset = self.queryset().filter(
            Q(order_number__icontains=query)
            | Q(customer__name__icontains=query)
            | Q(customer__phone__icontains=query)
            | Q(customer__customer_code__icontains=query)
        )
        return list(queryset[:limit])

    def count_by(self, field: str) -> Dict[Optional[str], int]:
        rows = Order.objects.order_by().values(field).annotate(total=Count("id"))
        return {row[field]: row["total"] for row in rows}

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist the order and its pending domain events."""
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.record(event, topic="orders")
        entity.clear_domain_events()

        logger.info("order.saved", order_id=str(entity.id), event_count=len(events))
        return entity

    def add_history(
        self,
        order: Order,
        old_status: Optional[str],
        actor: ActorContext,
        notes: str = "",
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order=order,
            old_status=old_status,
            status=order.status,
            workflow_stage=order.workflow_stage,
            notes=notes,
            updated_by_id=actor.user_id,
            updated_by_name=actor.display_name,
        )
        logger.info(
            "order.history_added",
            order_id=str(order.id),
            old_status=old_status,
            new_status=order.status,
            workflow_stage=order.workflow_stage,
        )
        return history

    def history(self, order_id: str) -> List[OrderStatusHistory]:
        return list(
            OrderStatusHistory.objects.filter(order_id=order_id)
            .select_related("updated_by")
            .order_by("created_at", "id")
        )
