"""Order DRF serializers for API input/output.

The serializers operate at the interface layer.  Business logic lives in
the service layer, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    FabricUnit,
    OrderPriority,
    OrderStatus,
    OrderType,
)
from modules.orders.models import Order, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Validates the shape of an order creation payload."""

    customer_id = serializers.UUIDField()
    store_id = serializers.UUIDField(required=False, allow_null=True)
    store_code = serializers.CharField(required=False, allow_blank=True, max_length=6)
    order_type = serializers.ChoiceField(choices=OrderType.choices)
    priority = serializers.ChoiceField(
        choices=OrderPriority.choices, default=OrderPriority.MEDIUM
    )
    garment_type = serializers.CharField(max_length=100)
    fabric_type = serializers.CharField(required=False, allow_blank=True, default="")
    fabric_color = serializers.CharField(required=False, allow_blank=True, default="")
    fabric_quantity = serializers.DecimalField(
        max_digits=6, decimal_places=2, required=False, allow_null=True
    )
    fabric_unit = serializers.ChoiceField(
        choices=FabricUnit.choices, default=FabricUnit.METERS
    )
    style_images = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    fabric_images = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    special_instructions = serializers.CharField(
        required=False, allow_blank=True, default=""
    )
    measurement_id = serializers.UUIDField(required=False, allow_null=True)
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    advance_paid = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    balance_amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    fitting_date = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    expected_status = serializers.ChoiceField(
        choices=OrderStatus.choices, required=False, allow_null=True
    )


class NotesSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    expected_status = serializers.ChoiceField(
        choices=OrderStatus.choices, required=False, allow_null=True
    )


class ScheduleFittingSerializer(serializers.Serializer):
    fitting_date = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order status history records."""

    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "status",
            "workflow_stage",
            "notes",
            "updated_by",
            "updated_by_name",
            "created_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested history)."""

    customer_code = serializers.CharField(source="customer.customer_code", read_only=True)
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    store_code = serializers.CharField(source="store.code", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "customer_code",
            "customer_name",
            "store_code",
            "order_type",
            "garment_type",
            "status",
            "workflow_stage",
            "priority",
            "total_amount",
            "balance_amount",
            "order_date",
            "expected_delivery_date",
            "assigned_tailor_id",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order representation with its status history."""

    customer_code = serializers.CharField(source="customer.customer_code", read_only=True)
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    store_code = serializers.CharField(source="store.code", read_only=True)
    assigned_tailor_code = serializers.CharField(
        source="assigned_tailor.tailor_code", read_only=True, default=None
    )
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "customer_code",
            "customer_name",
            "store_id",
            "store_code",
            "order_type",
            "status",
            "priority",
            "workflow_stage",
            "garment_type",
            "fabric_type",
            "fabric_color",
            "fabric_quantity",
            "fabric_unit",
            "style_images",
            "fabric_images",
            "special_instructions",
            "measurement_id",
            "measurement_snapshot",
            "total_amount",
            "advance_paid",
            "balance_amount",
            "advance_paid_date",
            "balance_paid_date",
            "order_date",
            "expected_delivery_date",
            "actual_delivery_date",
            "fitting_date",
            "stitching_started_at",
            "stitching_completed_at",
            "quality_checked_at",
            "assigned_tailor_id",
            "assigned_tailor_code",
            "created_by_id",
            "notes",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields
