"""Staff user model (``oms_users``).

Staff profiles describe *who* acts inside the shop (sales staff, store
managers, tailors, quality inspectors).  They are linked to login
accounts by ``username`` only, so the HTTP authentication backend stays
independent of the domain tables.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class StaffRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    STORE_MANAGER = "store_manager", "Store manager"
    SALES_STAFF = "sales_staff", "Sales staff"
    TAILOR = "tailor", "Tailor"
    QUALITY_INSPECTOR = "quality_inspector", "Quality inspector"


class StaffUser(BaseModel):
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(max_length=254, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    role = models.CharField(
        max_length=20,
        choices=StaffRole.choices,
        default=StaffRole.SALES_STAFF,
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="staff",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "oms_users"
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"
