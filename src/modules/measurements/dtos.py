"""Measurement DTOs.

All 21 values are optional; a value, when given, must be non-negative.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.measurements.constants import MeasurementUnit

Length = Optional[Annotated[Decimal, Field(ge=0, max_digits=6, decimal_places=2)]]


class MeasurementDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit: MeasurementUnit = MeasurementUnit.INCHES
    notes: str = ""

    top_fl: Length = None
    top_sh: Length = None
    top_sl: Length = None
    top_sr: Length = None
    top_mr: Length = None
    top_ah: Length = None
    top_ch: Length = None
    top_br: Length = None
    top_wr: Length = None
    top_hip: Length = None
    top_slit: Length = None
    top_fn: Length = None
    top_bn: Length = None
    top_dp: Length = None
    top_pp: Length = None

    bottom_fl: Length = None
    bottom_wr: Length = None
    bottom_sr: Length = None
    bottom_tr: Length = None
    bottom_lr: Length = None
    bottom_ar: Length = None
