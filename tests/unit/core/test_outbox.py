"""Unit tests for the transactional outbox.

Covers:
- OutboxEvent defaults and state transitions.
- The relay task handing pending events to the event bus.
"""

from __future__ import annotations

import uuid

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.tasks import relay_outbox_events
from modules.orders.events import OrderCreated

pytestmark = pytest.mark.unit


def _make_event(**overrides) -> OutboxEvent:
    defaults = {
        "event_type": "OrderCreated",
        "payload": OrderCreated(
            aggregate_id=uuid.uuid4(), order_number="ORD-KCH-20260314-001"
        ).as_payload(),
        "aggregate_id": "order-1",
        "topic": "orders",
    }
    defaults.update(overrides)
    return OutboxEvent.objects.create(**defaults)


class TestOutboxEvent:
    def test_defaults(self):
        event = _make_event()
        event.refresh_from_db()
        assert event.status == EventStatus.PENDING
        assert event.retry_count == 0
        assert event.processed_at is None
        assert event.id.version == 7

    def test_mark_as_published(self):
        event = _make_event()
        event.mark_as_published()
        event.refresh_from_db()
        assert event.status == EventStatus.PUBLISHED
        assert event.processed_at is not None

    def test_mark_as_failed_counts_retries(self):
        event = _make_event()
        event.mark_as_failed("boom")
        event.mark_as_failed("boom again")
        event.refresh_from_db()
        assert event.status == EventStatus.FAILED
        assert event.retry_count == 2
        assert event.error_message == "boom again"

    def test_str(self):
        assert "orders:OrderCreated [PENDING] (order-1)" == str(_make_event())

    def test_record_stores_domain_event(self):
        order_id = uuid.uuid4()
        event = OutboxEvent.record(
            OrderCreated(aggregate_id=order_id, order_number="ORD-KCH-20260314-002"),
            topic="orders",
        )
        event.refresh_from_db()
        assert event.event_type == "OrderCreated"
        assert event.aggregate_id == str(order_id)
        assert event.payload["order_number"] == "ORD-KCH-20260314-002"

    def test_backlog_counts_pending_and_failed(self):
        _make_event()
        _make_event(status=EventStatus.FAILED)
        _make_event(status=EventStatus.PUBLISHED)
        assert OutboxEvent.objects.backlog() == {"pending": 1, "failed": 1}


class TestRelay:
    def test_publishes_pending_events(self):
        event = _make_event()
        result = relay_outbox_events()
        event.refresh_from_db()
        assert result == {"published": 1, "failed": 0}
        assert event.status == EventStatus.PUBLISHED

    def test_skips_already_published(self):
        _make_event(status=EventStatus.PUBLISHED)
        assert relay_outbox_events() == {"published": 0, "failed": 0}

    def test_handler_failure_marks_event_failed(self, monkeypatch):
        from shared.infrastructure.bus import event_bus

        def explode(*_args, **_kwargs):
            raise RuntimeError("handler down")

        monkeypatch.setattr(event_bus, "dispatch", explode)
        event = _make_event()

        result = relay_outbox_events()
        event.refresh_from_db()
        assert result == {"published": 0, "failed": 1}
        assert event.status == EventStatus.FAILED
        assert event.error_message == "handler down"

    def test_failed_event_is_relayed_again(self):
        event = _make_event(status=EventStatus.FAILED, retry_count=1, error_message="handler down")

        assert relay_outbox_events() == {"published": 1, "failed": 0}
        event.refresh_from_db()
        assert event.status == EventStatus.PUBLISHED
        assert event.retry_count == 1

    def test_retry_count_grows_until_cap(self, monkeypatch, settings):
        from shared.infrastructure.bus import event_bus

        def explode(*_args, **_kwargs):
            raise RuntimeError("handler down")

        settings.OMS_OUTBOX_MAX_RETRIES = 3
        monkeypatch.setattr(event_bus, "dispatch", explode)
        event = _make_event()

        for _ in range(5):
            relay_outbox_events()

        event.refresh_from_db()
        assert event.retry_count == 3
        assert event.status == EventStatus.FAILED
        assert OutboxEvent.objects.pending(max_retries=3).count() == 0
