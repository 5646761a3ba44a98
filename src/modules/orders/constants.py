"""Order domain constants.

Choices for the customer-facing ``status``, the internal production
``workflow_stage`` and the descriptive order attributes.  The legal
transitions between them live in ``modules.orders.workflow``.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    IN_PROGRESS = "in_progress", "In progress"
    FITTING_SCHEDULED = "fitting_scheduled", "Fitting scheduled"
    READY = "ready", "Ready"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class WorkflowStage(models.TextChoices):
    ASSIGNED = "assigned", "Assigned"
    IN_PROGRESS = "in_progress", "In progress"
    STITCHING_COMPLETE = "stitching_complete", "Stitching complete"
    QUALITY_CHECK = "quality_check", "Quality check"
    APPROVED = "approved", "Approved"
    COMPLETED = "completed", "Completed"


class WorkflowEvent(models.TextChoices):
    ASSIGNED = "assigned", "Assigned to tailor"
    STITCHING_STARTED = "stitching_started", "Stitching started"
    STITCHING_COMPLETED = "stitching_completed", "Stitching completed"
    QUALITY_PASSED = "quality_passed", "Quality check passed"
    QUALITY_FAILED = "quality_failed", "Quality check failed"
    ORDER_COMPLETED = "order_completed", "Order completed"


class OrderType(models.TextChoices):
    NEW_STITCHING = "new_stitching", "New stitching"
    ALTERATIONS = "alterations", "Alterations"


class OrderPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


class FabricUnit(models.TextChoices):
    METERS = "meters", "Meters"
    YARDS = "yards", "Yards"


TERMINAL_STATUSES: frozenset[str] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
)

# Counted as "pending" on the dashboard.
OPEN_STATUSES: tuple[str, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.IN_PROGRESS,
)
