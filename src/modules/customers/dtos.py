"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  They are
the contract between the API layer (DRF serializers) and the services,
and they are immutable (``frozen=True``).

Name and phone are validated here, before the service issues any query.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

_PHONE_STRIP_RE = re.compile(r"[\s\-().]")
_PHONE_RE = re.compile(r"^\+?\d{7,15}$")


def normalize_phone(value: str) -> str:
    """Strip separators and check the remaining digits."""
    cleaned = _PHONE_STRIP_RE.sub("", value or "")
    if not cleaned:
        raise ValueError("Phone is required.")
    if not _PHONE_RE.match(cleaned):
        raise ValueError("Phone must contain 7 to 15 digits.")
    return cleaned


class AddressDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    street: str = ""
    city: str = ""
    state: str = ""
    pin_code: str = ""
    country: str = "India"


class PreferencesDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: bool = True
    sms: bool = True
    whatsapp: bool = False


class CreateCustomerDTO(BaseModel):
    """Input for customer registration."""

    model_config = ConfigDict(frozen=True)

    name: str
    phone: str
    email: Optional[EmailStr] = None
    address: AddressDTO = AddressDTO()
    preferences: PreferencesDTO = PreferencesDTO()

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required.")
        return v

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        return normalize_phone(v)


class UpdateCustomerDTO(BaseModel):
    """Partial update: only supplied fields are changed."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[AddressDTO] = None
    preferences: Optional[PreferencesDTO] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank.")
        return v

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else normalize_phone(v)
