"""Order and OrderStatusHistory models.

Business rules implemented:
- ``order_number`` (``ORD-<STORE>-YYYYMMDD-NNN``) is assigned by the
  order service and never changes.
- ``status`` and ``workflow_stage`` are only written through
  ``Order.apply_state`` with a state produced by
  ``modules.orders.workflow``; ``OrderService`` is their single owner.
- Every status change appends one ``OrderStatusHistory`` row.
- Customer and store FKs use PROTECT to preserve financial history.
- Orders are never deleted.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    FabricUnit,
    OrderPriority,
    OrderStatus,
    OrderType,
    WorkflowStage,
)
from modules.orders.workflow import OrderState
from shared.domain.events import DomainEventMixin

_MONEY = {
    "max_digits": 10,
    "decimal_places": 2,
    "default": Decimal("0.00"),
    "validators": [MinValueValidator(Decimal("0.00"))],
}


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    The UUIDv7 ``id`` is used for internal references and API look-ups;
    ``order_number`` is what customers and staff quote.
    """

    order_number = models.CharField(max_length=40, unique=True, editable=False)
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_type = models.CharField(max_length=20, choices=OrderType.choices)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    priority = models.CharField(
        max_length=10,
        choices=OrderPriority.choices,
        default=OrderPriority.MEDIUM,
    )
    workflow_stage = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=WorkflowStage.choices,
        null=True,
        blank=True,
    )

    # Garment / fabric
    garment_type = models.CharField(max_length=100)
    fabric_type = models.CharField(max_length=100, blank=True, default="")
    fabric_color = models.CharField(max_length=50, blank=True, default="")
    fabric_quantity = models.DecimalField(
        max_digits=6, decimal_places=2, null=True, blank=True
    )
    fabric_unit = models.CharField(
        max_length=10, choices=FabricUnit.choices, default=FabricUnit.METERS
    )
    style_images = models.JSONField(default=list, blank=True)
    fabric_images = models.JSONField(default=list, blank=True)
    special_instructions = models.TextField(blank=True, default="")

    # Measurements
    measurement = models.ForeignKey(
        "measurements.CustomerMeasurement",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    measurement_snapshot = models.JSONField(null=True, blank=True)

    # Money
    total_amount = models.DecimalField(**_MONEY)
    advance_paid = models.DecimalField(**_MONEY)
    balance_amount = models.DecimalField(**_MONEY)
    advance_paid_date = models.DateTimeField(null=True, blank=True)
    balance_paid_date = models.DateTimeField(null=True, blank=True)

    # Dates
    order_date = models.DateTimeField(default=timezone.now)
    expected_delivery_date = models.DateTimeField()
    actual_delivery_date = models.DateTimeField(null=True, blank=True)
    fitting_date = models.DateTimeField(null=True, blank=True)

    # Production timestamps
    stitching_started_at = models.DateTimeField(null=True, blank=True)
    stitching_completed_at = models.DateTimeField(null=True, blank=True)
    quality_checked_at = models.DateTimeField(null=True, blank=True)

    assigned_tailor = models.ForeignKey(
        "tailors.Tailor",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    created_by = models.ForeignKey(
        "staff.StaffUser",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_orders",
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "oms_orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="oms_orders_status_idx"),
            models.Index(fields=["workflow_stage"], name="oms_orders_stage_idx"),
            models.Index(fields=["-created_at"], name="oms_orders_created_idx"),
            models.Index(
                fields=["expected_delivery_date"], name="oms_orders_expected_idx"
            ),
        ]

    # ------------------------------------------------------------------
    # State machine helpers
    # ------------------------------------------------------------------

    @property
    def state(self) -> OrderState:
        return OrderState(status=self.status, workflow_stage=self.workflow_stage)

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    def apply_state(self, state: OrderState) -> None:
        self.status = state.status
        self.workflow_stage = state.workflow_stage

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status changes.

    ``workflow_stage`` is the stage *after* the change.  ``updated_by`` is
    ``None`` for system changes or accounts without a staff profile;
    ``updated_by_name`` always carries a display name.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="status_history",
    )
    old_status = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    workflow_stage = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=WorkflowStage.choices,
        null=True,
        blank=True,
    )
    notes = models.TextField(blank=True, default="")
    updated_by = models.ForeignKey(
        "staff.StaffUser",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_by_name = models.CharField(max_length=150, default="system")

    class Meta:
        db_table = "oms_order_status_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["order", "created_at"],
                name="oms_osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}: {self.old_status} -> {self.status}"
