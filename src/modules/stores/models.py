"""Store (branch) model.

``code`` is embedded in every order number of the branch, so it is
restricted to 2-6 uppercase letters or digits and never changes.
"""

from __future__ import annotations

from django.core.validators import RegexValidator
from django.db import models

from modules.core.models import BaseModel

STORE_CODE_VALIDATOR = RegexValidator(
    regex=r"^[A-Z0-9]{2,6}$",
    message="Store code must be 2-6 uppercase letters or digits.",
)


class Store(BaseModel):
    code = models.CharField(
        max_length=6, unique=True, validators=[STORE_CODE_VALIDATOR]
    )
    name = models.CharField(max_length=255)
    address_street = models.CharField(max_length=255, blank=True, default="")
    address_city = models.CharField(max_length=100, blank=True, default="")
    address_state = models.CharField(max_length=100, blank=True, default="")
    address_pin_code = models.CharField(max_length=10, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(max_length=254, blank=True, default="")
    manager = models.ForeignKey(
        "staff.StaffUser",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_stores",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "oms_stores"
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
