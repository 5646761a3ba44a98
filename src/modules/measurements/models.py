"""Customer measurement history.

A customer accumulates measurement records over time; the most recent
one is the current set.  Orders copy the referenced record into
``Order.measurement_snapshot`` so later edits never alter past orders.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.measurements.constants import MEASUREMENT_FIELDS, MeasurementUnit


def _measurement_field() -> models.DecimalField:
    return models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )


class CustomerMeasurement(BaseModel):
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="measurements",
    )
    unit = models.CharField(
        max_length=6,
        choices=MeasurementUnit.choices,
        default=MeasurementUnit.INCHES,
    )

    top_fl = _measurement_field()
    top_sh = _measurement_field()
    top_sl = _measurement_field()
    top_sr = _measurement_field()
    top_mr = _measurement_field()
    top_ah = _measurement_field()
    top_ch = _measurement_field()
    top_br = _measurement_field()
    top_wr = _measurement_field()
    top_hip = _measurement_field()
    top_slit = _measurement_field()
    top_fn = _measurement_field()
    top_bn = _measurement_field()
    top_dp = _measurement_field()
    top_pp = _measurement_field()

    bottom_fl = _measurement_field()
    bottom_wr = _measurement_field()
    bottom_sr = _measurement_field()
    bottom_tr = _measurement_field()
    bottom_lr = _measurement_field()
    bottom_ar = _measurement_field()

    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "oms_customer_measurements"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"Measurements {self.id} ({self.unit})"

    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe copy embedded into orders."""
        data: Dict[str, Any] = {
            "measurement_id": str(self.id),
            "unit": self.unit,
            "notes": self.notes,
        }
        for field in MEASUREMENT_FIELDS:
            value = getattr(self, field)
            data[field] = None if value is None else str(value)
        return data
