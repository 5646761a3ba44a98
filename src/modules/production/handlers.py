"""Event handlers for production events."""

from __future__ import annotations

import structlog

from modules.production.events import OrderAssigned, QualityCheckRecorded
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderAssignedHandler(IEventHandler[OrderAssigned]):
    def handle(self, event: OrderAssigned) -> None:
        logger.info(
            "notification.tailor_assignment",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            tailor_code=event.tailor_code,
        )


class QualityCheckRecordedHandler(IEventHandler[QualityCheckRecorded]):
    def handle(self, event: QualityCheckRecorded) -> None:
        logger.info(
            "notification.quality_check",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            passed=event.passed,
        )


order_assigned_handler = OrderAssignedHandler()
quality_check_recorded_handler = QualityCheckRecordedHandler()
