"""Tailor DTOs."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.tailors.constants import DEFAULT_MAX_CONCURRENT_ORDERS, SkillLevel


def _clean_specializations(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    seen: List[str] = []
    for value in values:
        value = value.strip().lower()
        if value and value not in seen:
            seen.append(value)
    return seen


class CreateTailorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    specializations: List[str] = []
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    hourly_rate: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=8, decimal_places=2)
    max_concurrent_orders: int = Field(default=DEFAULT_MAX_CONCURRENT_ORDERS, ge=1)
    is_available: bool = True

    @field_validator("specializations")
    @classmethod
    def clean_specializations(cls, v):
        return _clean_specializations(v)


class UpdateTailorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    specializations: Optional[List[str]] = None
    skill_level: Optional[SkillLevel] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=8, decimal_places=2)
    max_concurrent_orders: Optional[int] = Field(default=None, ge=1)
    is_available: Optional[bool] = None

    @field_validator("specializations")
    @classmethod
    def clean_specializations(cls, v):
        return _clean_specializations(v)
