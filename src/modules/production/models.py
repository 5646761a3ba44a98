"""OrderAssignment and QualityCheck models.

- An order has at most one active (``assigned`` / ``in_progress``)
  assignment; a partial unique constraint backs the service check.
- Quality checks are append-only audit records; ``passed`` is derived
  from the ratings when the check is recorded.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.production.constants import (
    ACTIVE_ASSIGNMENT_STATUSES,
    MAX_RATING,
    MIN_RATING,
    AssignmentStatus,
    OverallQuality,
)
from modules.production.quality import check_score

_RATING_VALIDATORS = [MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]


class OrderAssignment(BaseModel):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="assignments",
    )
    tailor = models.ForeignKey(
        "tailors.Tailor",
        on_delete=models.PROTECT,
        related_name="assignments",
    )
    status = models.CharField(
        max_length=20,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ASSIGNED,
    )
    assigned_at = models.DateTimeField(default=timezone.now)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    assigned_by = models.ForeignKey(
        "staff.StaffUser",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    estimated_completion_time = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    # Closed because the order was cancelled, not because stitching finished.
    released = models.BooleanField(default=False)

    class Meta:
        db_table = "oms_order_assignments"
        ordering = ["-assigned_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order"],
                condition=models.Q(status__in=ACTIVE_ASSIGNMENT_STATUSES),
                name="oms_assignment_one_active_per_order",
            ),
        ]
        indexes = [
            models.Index(fields=["tailor", "status"], name="oms_assignment_tailor_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} -> {self.tailor_id} ({self.status})"

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_ASSIGNMENT_STATUSES


class QualityCheck(BaseModel):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="quality_checks",
    )
    tailor = models.ForeignKey(
        "tailors.Tailor",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quality_checks",
    )
    checked_by = models.ForeignKey(
        "staff.StaffUser",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    overall_quality = models.CharField(max_length=20, choices=OverallQuality.choices)
    stitching_quality = models.PositiveSmallIntegerField(validators=_RATING_VALIDATORS)
    finishing_quality = models.PositiveSmallIntegerField(validators=_RATING_VALIDATORS)
    measurement_accuracy = models.PositiveSmallIntegerField(validators=_RATING_VALIDATORS)
    design_adherence = models.PositiveSmallIntegerField(validators=_RATING_VALIDATORS)
    passed = models.BooleanField()
    defects_found = models.JSONField(default=list, blank=True)
    corrective_actions = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")
    check_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "oms_quality_checks"
        ordering = ["-check_date", "-id"]
        indexes = [
            models.Index(fields=["order", "-check_date"], name="oms_qc_order_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} {'passed' if self.passed else 'failed'}"

    @property
    def score(self) -> Decimal:
        return check_score(
            self.stitching_quality,
            self.finishing_quality,
            self.measurement_accuracy,
            self.design_adherence,
        )
