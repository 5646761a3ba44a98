"""Domain events for the Orders bounded context.

Stored in the outbox together with the order row and relayed to the
in-process bus, where the notification handlers subscribe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised when an order is placed."""

    order_number: str = ""
    customer_id: str = ""
    expected_delivery_date: str = ""


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised on every status change, requested or workflow-driven."""

    order_number: str = ""
    old_status: Optional[str] = None
    new_status: str = ""
    workflow_stage: Optional[str] = None
    changed_by: str = "system"
