"""Unit tests for domain events registration, payloads and the in-memory bus."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCreated
from modules.orders.models import Order
from modules.production.events import QualityCheckRecorded
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class _Recorder:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


def test_order_registers_and_clears_domain_events():
    order = Order(
        order_number="ORD-KCH-20260301-001",
        status=OrderStatus.PENDING,
        total_amount=Decimal("0.00"),
    )

    assert order.domain_events == []

    event = OrderCreated(aggregate_id=order.id, order_number=order.order_number)
    order.add_domain_event(event)

    assert order.domain_events == [event]
    assert event.event_name == "OrderCreated"

    order.clear_domain_events()
    assert order.domain_events == []


def test_payload_is_json_safe():
    aggregate_id = uuid4()
    payload = OrderCreated(
        aggregate_id=aggregate_id, order_number="ORD-KCH-20260301-001"
    ).as_payload()

    assert payload["aggregate_id"] == str(aggregate_id)
    assert payload["order_number"] == "ORD-KCH-20260301-001"
    assert payload["event_name"] == "OrderCreated"
    assert isinstance(payload["occurred_on"], str)


def test_dispatch_rebuilds_event_from_payload():
    bus = InMemoryEventBus()
    recorder = _Recorder()
    bus.subscribe(QualityCheckRecorded, recorder)
    original = QualityCheckRecorded(
        aggregate_id=uuid4(), order_number="ORD-KCH-20260301-001", passed=True
    )

    delivered = bus.dispatch("QualityCheckRecorded", original.as_payload())

    assert delivered == 1
    assert recorder.events[0].order_number == "ORD-KCH-20260301-001"
    assert recorder.events[0].passed is True


def test_dispatch_without_subscribers():
    bus = InMemoryEventBus()
    assert bus.dispatch("OrderCreated", {"aggregate_id": str(uuid4())}) == 0


def test_subscribe_is_idempotent():
    bus = InMemoryEventBus()
    recorder = _Recorder()
    bus.subscribe(OrderCreated, recorder)
    bus.subscribe(OrderCreated, recorder)

    bus.publish(OrderCreated(aggregate_id=uuid4()))

    assert len(recorder.events) == 1
