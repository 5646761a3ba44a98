"""Customer model.

Business rules implemented:
- ``customer_code`` (``CUST-YYYY-NNNNN``) is generated once and never
  changes.
- Contact details, postal address and communication preferences are
  mutable through ``CustomerService.update_customer``.
- ``order_history`` is a denormalised list of order numbers, appended by
  the order service when an order is placed.
- Customers are never deleted; orders reference them with ``PROTECT``.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    customer_code = models.CharField(max_length=15, unique=True, editable=False)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20)
    email = models.EmailField(max_length=254, blank=True, default="")

    address_street = models.CharField(max_length=255, blank=True, default="")
    address_city = models.CharField(max_length=100, blank=True, default="")
    address_state = models.CharField(max_length=100, blank=True, default="")
    address_pin_code = models.CharField(max_length=10, blank=True, default="")
    address_country = models.CharField(max_length=100, blank=True, default="India")

    notify_email = models.BooleanField(default=True)
    notify_sms = models.BooleanField(default=True)
    notify_whatsapp = models.BooleanField(default=False)

    order_history = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "oms_customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["phone"], name="oms_customers_phone_idx"),
            models.Index(fields=["-created_at"], name="oms_customers_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.customer_code} {self.name}"
