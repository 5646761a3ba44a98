"""Tailor and TailorPerformance models.

Counter rules (maintained by the assignment engine, under a row lock on
the tailor):
- ``current_order_count``: +1 on assignment, -1 (never below zero) when
  the assignment completes or its order is cancelled.
- ``total_orders_completed``: +1 when stitching completes.
- ``quality_rating``: running mean of quality-check scores over
  ``rated_checks_count`` checks.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.tailors.constants import (
    DEFAULT_MAX_CONCURRENT_ORDERS,
    MAX_QUALITY_RATING,
    RATING_PLACES,
    SkillLevel,
)


class Tailor(BaseModel):
    user = models.OneToOneField(
        "staff.StaffUser",
        on_delete=models.PROTECT,
        related_name="tailor_profile",
    )
    tailor_code = models.CharField(max_length=7, unique=True, editable=False)
    specializations = models.JSONField(default=list, blank=True)
    skill_level = models.CharField(
        max_length=20,
        choices=SkillLevel.choices,
        default=SkillLevel.INTERMEDIATE,
    )
    hourly_rate = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_available = models.BooleanField(default=True)
    max_concurrent_orders = models.PositiveIntegerField(
        default=DEFAULT_MAX_CONCURRENT_ORDERS,
        validators=[MinValueValidator(1)],
    )
    current_order_count = models.PositiveIntegerField(default=0)
    total_orders_completed = models.PositiveIntegerField(default=0)
    quality_rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[
            MinValueValidator(Decimal("0.00")),
            MaxValueValidator(MAX_QUALITY_RATING),
        ],
    )
    rated_checks_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "oms_tailors"
        ordering = ["current_order_count", "created_at"]

    def __str__(self) -> str:
        return f"{self.tailor_code} ({self.user_id})"

    # ------------------------------------------------------------------
    # Load counters
    # ------------------------------------------------------------------

    @property
    def has_capacity(self) -> bool:
        return self.current_order_count < self.max_concurrent_orders

    def take_order(self) -> None:
        self.current_order_count += 1

    def release_order(self, completed: bool) -> None:
        self.current_order_count = max(self.current_order_count - 1, 0)
        if completed:
            self.total_orders_completed += 1

    def add_quality_score(self, score: Decimal) -> None:
        """Fold one check score into the running mean."""
        total = self.quality_rating * self.rated_checks_count + score
        self.rated_checks_count += 1
        rating = (total / self.rated_checks_count).quantize(RATING_PLACES)
        self.quality_rating = min(rating, MAX_QUALITY_RATING)


class TailorPerformance(BaseModel):
    """Monthly roll-up of a tailor's output (``month_year`` is the 1st)."""

    tailor = models.ForeignKey(
        "tailors.Tailor",
        on_delete=models.CASCADE,
        related_name="performance",
    )
    month_year = models.DateField()
    orders_completed = models.PositiveIntegerField(default=0)
    orders_rejected = models.PositiveIntegerField(default=0)
    quality_score = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    efficiency_rating = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("0.00")
    )
    total_earnings = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    class Meta:
        db_table = "oms_tailor_performance"
        ordering = ["-month_year"]
        constraints = [
            models.UniqueConstraint(
                fields=["tailor", "month_year"],
                name="oms_tailor_performance_month_uniq",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.tailor_id} {self.month_year:%Y-%m}"
