"""Domain events raised by the production engine.

They ride on the order aggregate, so they land in the outbox with the
order row of the same transition.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderAssigned(DomainEvent):
    order_number: str = ""
    assignment_id: str = ""
    tailor_id: str = ""
    tailor_code: str = ""


@dataclass(frozen=True, kw_only=True)
class QualityCheckRecorded(DomainEvent):
    order_number: str = ""
    quality_check_id: str = ""
    passed: bool = False
    overall_quality: str = ""
