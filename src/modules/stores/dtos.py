"""Store DTOs."""

from __future__ import annotations

import re
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

_CODE_RE = re.compile(r"^[A-Z0-9]{2,6}$")


class CreateStoreDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    address_street: str = ""
    address_city: str = ""
    address_state: str = ""
    address_pin_code: str = ""
    phone: str = ""
    email: Optional[EmailStr] = None
    manager_id: Optional[UUID] = None

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        v = v.strip().upper()
        if not _CODE_RE.match(v):
            raise ValueError("Store code must be 2-6 uppercase letters or digits.")
        return v

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Store name is required.")
        return v
