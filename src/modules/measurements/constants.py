"""Measurement field catalogue."""

from __future__ import annotations

from django.db import models


class MeasurementUnit(models.TextChoices):
    CM = "cm", "Centimetres"
    INCHES = "inches", "Inches"


# Front length, shoulder, sleeve length, sleeve round, mid round, armhole,
# chest, bust round, waist round, hip, slit, front neck, back neck,
# dart point, princess point.
TOP_FIELDS = (
    "top_fl",
    "top_sh",
    "top_sl",
    "top_sr",
    "top_mr",
    "top_ah",
    "top_ch",
    "top_br",
    "top_wr",
    "top_hip",
    "top_slit",
    "top_fn",
    "top_bn",
    "top_dp",
    "top_pp",
)

# Full length, waist round, seat round, thigh round, leg round, ankle round.
BOTTOM_FIELDS = (
    "bottom_fl",
    "bottom_wr",
    "bottom_sr",
    "bottom_tr",
    "bottom_lr",
    "bottom_ar",
)

MEASUREMENT_FIELDS = TOP_FIELDS + BOTTOM_FIELDS
