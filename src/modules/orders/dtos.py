"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  They are
the contract between the API layer (DRF serializers) and the services,
and they are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order creation.
- ``StatusUpdateDTO``: caller-requested status change.
- ``ScheduleFittingDTO``: fitting appointment.
- ``PaymentDTO``: a payment towards the balance.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import FabricUnit, OrderPriority, OrderStatus, OrderType
from modules.orders.exceptions import InvalidPayment


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    The store is identified by ``store_id`` or by its short ``store_code``.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    store_id: Optional[UUID] = None
    store_code: Optional[str] = None
    order_type: OrderType
    priority: OrderPriority = OrderPriority.MEDIUM

    garment_type: str
    fabric_type: str = ""
    fabric_color: str = ""
    fabric_quantity: Optional[Decimal] = Field(default=None, ge=0)
    fabric_unit: FabricUnit = FabricUnit.METERS
    style_images: List[str] = []
    fabric_images: List[str] = []
    special_instructions: str = ""

    measurement_id: Optional[UUID] = None

    total_amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    advance_paid: Decimal = Field(
        default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2
    )
    balance_amount: Optional[Decimal] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )

    fitting_date: Optional[datetime] = None
    notes: str = ""

    @field_validator("garment_type")
    @classmethod
    def garment_type_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Garment type is required.")
        return v

    @field_validator("store_code")
    @classmethod
    def normalize_store_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None

    @model_validator(mode="after")
    def store_reference_required(self) -> Self:
        if self.store_id is None and not self.store_code:
            raise ValueError("Either store_id or store_code is required.")
        return self

    def resolved_balance(self, enforce: bool) -> Decimal:
        """Balance to store for this order.

        With ``enforce`` the balance is ``total - advance``: derived when
        omitted, rejected when the caller's figure disagrees.  Without it
        the caller's figure is stored as given.

        Raises:
            InvalidPayment: inconsistent amounts while enforcing.
        """
        derived = self.total_amount - self.advance_paid
        if not enforce:
            return self.balance_amount if self.balance_amount is not None else derived

        if self.advance_paid > self.total_amount:
            raise InvalidPayment("Advance paid cannot exceed the total amount.")
        if self.balance_amount is not None and self.balance_amount != derived:
            raise InvalidPayment(
                f"Balance {self.balance_amount} does not equal total minus advance ({derived})."
            )
        return derived


class StatusUpdateDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: OrderStatus
    notes: str = ""
    expected_status: Optional[OrderStatus] = None


class ScheduleFittingDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    fitting_date: datetime
    notes: str = ""


class PaymentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
