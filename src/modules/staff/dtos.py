"""Staff DTOs for the Service Layer."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.staff.models import StaffRole


class CreateStaffUserDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    email: Optional[EmailStr] = None
    phone: str = ""
    role: StaffRole = StaffRole.SALES_STAFF
    store_id: Optional[UUID] = None

    @field_validator("username")
    @classmethod
    def username_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required.")
        return v


class UpdateStaffUserDTO(BaseModel):
    """Partial update: only the fields present in ``model_fields_set`` change.

    ``store_id=None`` given explicitly detaches the user from its branch.
    """

    model_config = ConfigDict(frozen=True)

    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[StaffRole] = None
    store_id: Optional[UUID] = None
    is_active: Optional[bool] = None
