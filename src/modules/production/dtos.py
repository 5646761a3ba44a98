"""Production DTOs."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from modules.production.constants import MAX_RATING, MIN_RATING, OverallQuality


class AssignOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    tailor_id: UUID
    estimated_completion_time: Optional[str] = None
    notes: str = ""


class QualityCheckDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    overall_quality: OverallQuality
    stitching_quality: int = Field(ge=MIN_RATING, le=MAX_RATING)
    finishing_quality: int = Field(ge=MIN_RATING, le=MAX_RATING)
    measurement_accuracy: int = Field(ge=MIN_RATING, le=MAX_RATING)
    design_adherence: int = Field(ge=MIN_RATING, le=MAX_RATING)
    defects_found: List[str] = []
    corrective_actions: str = ""
    notes: str = ""
