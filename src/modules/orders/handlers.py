"""Event handlers for Orders domain events.

Notification delivery (email / SMS / WhatsApp) is not wired to any
provider; handlers record what would be sent.
"""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCreated, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            "notification.order_confirmation",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            customer_id=event.customer_id,
            expected_delivery_date=event.expected_delivery_date,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "notification.order_status",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            old_status=event.old_status,
            new_status=event.new_status,
        )


order_created_handler = OrderCreatedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
