"""Unit tests for OrderService.

Covers:
- Order creation: number, delivery date, history, outbox, snapshot.
- Creation failures: customer, store, measurement, number exhaustion.
- Requested status changes with history and optimistic checks.
- Fitting appointments and payments.
- Queries: search, status history, workflow statistics.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock
from uuid import uuid4

import pytest
from django.utils import timezone

from modules.core.exceptions import IdentifierSpaceExhausted
from modules.core.identifiers import ORDER_ID_PATTERN
from modules.core.models import OutboxEvent
from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer
from modules.measurements.models import CustomerMeasurement
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.exceptions import (
    InvalidMeasurementReference,
    InvalidOrderStatus,
    InvalidPayment,
    OrderNotFound,
    StaleOrderState,
)
from modules.orders.models import OrderStatusHistory
from modules.stores.exceptions import InactiveStore, StoreNotFound

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestCreateOrder:
    def test_creates_pending_order(self, make_order, customer, sales_user):
        order = make_order()

        assert ORDER_ID_PATTERN.match(order.order_number)
        assert order.order_number.startswith("ORD-KCH-")
        assert order.status == OrderStatus.PENDING
        assert order.workflow_stage is None
        assert order.balance_amount == Decimal("1000.00")
        assert order.advance_paid_date is not None
        assert order.created_by_id == sales_user.id

    def test_expected_delivery_follows_type_and_priority(self, make_order):
        order = make_order(order_type="alterations", priority="urgent")
        assert order.expected_delivery_date - order.order_date == timedelta(days=2)

    def test_first_history_entry(self, make_order, sales_user):
        order = make_order()
        history = list(OrderStatusHistory.objects.filter(order=order))

        assert len(history) == 1
        assert history[0].old_status is None
        assert history[0].status == OrderStatus.PENDING
        assert history[0].updated_by_id == sales_user.id
        assert history[0].updated_by_name == "priya"

    def test_appends_number_to_customer_history(self, make_order, customer):
        order = make_order()
        customer.refresh_from_db()
        assert customer.order_history == [order.order_number]

    def test_records_outbox_event(self, make_order):
        order = make_order()
        event = OutboxEvent.objects.get(aggregate_id=str(order.id), event_type="OrderCreated")
        assert event.payload["order_number"] == order.order_number
        assert event.topic == "orders"

    def test_store_can_be_given_by_code(self, make_order):
        order = make_order(store_id=None, store_code="kch")
        assert order.store.code == "KCH"

    def test_measurement_is_snapshotted(self, make_order, measurement):
        order = make_order(measurement_id=measurement.id)
        assert order.measurement_id == measurement.id
        assert order.measurement_snapshot["top_fl"] == "29.50"

        measurement.top_fl = Decimal("31.00")
        measurement.save()
        order.refresh_from_db()
        assert order.measurement_snapshot["top_fl"] == "29.50"

    def test_measurement_of_other_customer_rejected(self, make_order):
        other = Customer.objects.create(
            customer_code="CUST-2026-00077", name="Other", phone="+919000000001"
        )
        foreign = CustomerMeasurement.objects.create(customer=other)
        with pytest.raises(InvalidMeasurementReference):
            make_order(measurement_id=foreign.id)

    def test_unknown_customer(self, make_order):
        with pytest.raises(CustomerNotFound):
            make_order(customer_id=uuid4())

    def test_unknown_store(self, make_order):
        with pytest.raises(StoreNotFound):
            make_order(store_id=None, store_code="ZZZ")

    def test_inactive_store(self, make_order, store):
        store.is_active = False
        store.save()
        with pytest.raises(InactiveStore):
            make_order()

    def test_inconsistent_balance_writes_nothing(self, make_order):
        with pytest.raises(InvalidPayment):
            make_order(balance_amount=Decimal("10.00"))
        assert not OutboxEvent.objects.exists()
        assert not OrderStatusHistory.objects.exists()

    def test_number_exhaustion(self, order_service, customer, store, actor):
        dto = CreateOrderDTO(
            customer_id=customer.id,
            store_id=store.id,
            order_type="new_stitching",
            garment_type="shirt",
            total_amount=Decimal("100.00"),
        )
        with mock.patch.object(order_service._order_repo, "number_exists", return_value=True):
            with pytest.raises(IdentifierSpaceExhausted):
                order_service.create_order(dto, actor)
        customer.refresh_from_db()
        assert customer.order_history == []


# ---------------------------------------------------------------------------
# Status changes
# ---------------------------------------------------------------------------


class TestUpdateStatus:
    def test_confirms_order_and_records_actor(self, make_order, order_service, actor):
        order = make_order()
        updated = order_service.update_status(
            str(order.id), OrderStatus.CONFIRMED, actor, notes="Fabric received"
        )

        assert updated.status == OrderStatus.CONFIRMED
        latest = order_service.get_status_history(str(order.id))[-1]
        assert latest.old_status == OrderStatus.PENDING
        assert latest.status == OrderStatus.CONFIRMED
        assert latest.notes == "Fabric received"
        assert latest.updated_by_name == "priya"

    def test_invalid_transition_leaves_order_untouched(self, make_order, order_service, actor):
        order = make_order()
        with pytest.raises(InvalidOrderStatus):
            order_service.update_status(str(order.id), OrderStatus.DELIVERED, actor)

        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING
        assert len(order_service.get_status_history(str(order.id))) == 1

    def test_stale_expected_status(self, make_order, order_service, actor):
        order = make_order()
        with pytest.raises(StaleOrderState):
            order_service.update_status(
                str(order.id),
                OrderStatus.IN_PROGRESS,
                actor,
                expected_status=OrderStatus.CONFIRMED,
            )

    def test_delivery_stamps_actual_date(self, make_order, order_service, actor):
        order = make_order()
        for target in (OrderStatus.CONFIRMED, OrderStatus.READY, OrderStatus.DELIVERED):
            order = order_service.update_status(str(order.id), target, actor)

        assert order.status == OrderStatus.DELIVERED
        assert order.actual_delivery_date is not None
        assert order.workflow_stage is None

    def test_cancel_through_update_status(self, make_order, order_service, actor):
        order = make_order()
        cancelled = order_service.update_status(str(order.id), OrderStatus.CANCELLED, actor)
        assert cancelled.status == OrderStatus.CANCELLED
        assert cancelled.is_terminal

    def test_cancelled_order_is_final(self, make_order, order_service, actor):
        order = make_order()
        order_service.cancel_order(str(order.id), actor)
        with pytest.raises(InvalidOrderStatus):
            order_service.update_status(str(order.id), OrderStatus.CONFIRMED, actor)

    def test_unknown_order(self, order_service, actor):
        with pytest.raises(OrderNotFound):
            order_service.update_status(str(uuid4()), OrderStatus.CONFIRMED, actor)

    def test_malformed_id_is_not_found(self, order_service, actor):
        with pytest.raises(OrderNotFound):
            order_service.update_status("not-a-uuid", OrderStatus.CONFIRMED, actor)

    def test_status_change_event_in_outbox(self, make_order, order_service, actor):
        order = make_order()
        order_service.update_status(str(order.id), OrderStatus.CONFIRMED, actor)
        event = OutboxEvent.objects.get(event_type="OrderStatusChanged")
        assert event.payload["old_status"] == "pending"
        assert event.payload["new_status"] == "confirmed"
        assert event.payload["changed_by"] == "priya"


class TestFittingAndPayments:
    def test_first_fitting_moves_status(self, make_order, order_service, actor):
        order = make_order()
        order_service.update_status(str(order.id), OrderStatus.CONFIRMED, actor)
        when = timezone.now() + timedelta(days=5)

        order = order_service.schedule_fitting(str(order.id), when, actor)

        assert order.status == OrderStatus.FITTING_SCHEDULED
        assert order.fitting_date == when

    def test_reschedule_only_changes_date(self, make_order, order_service, actor):
        order = make_order()
        order_service.update_status(str(order.id), OrderStatus.CONFIRMED, actor)
        order_service.schedule_fitting(str(order.id), timezone.now() + timedelta(days=5), actor)
        history_before = len(order_service.get_status_history(str(order.id)))

        later = timezone.now() + timedelta(days=8)
        order = order_service.schedule_fitting(str(order.id), later, actor)

        assert order.fitting_date == later
        assert len(order_service.get_status_history(str(order.id))) == history_before

    def test_fitting_not_allowed_from_pending(self, make_order, order_service, actor):
        order = make_order()
        with pytest.raises(InvalidOrderStatus):
            order_service.schedule_fitting(str(order.id), timezone.now(), actor)

    def test_payment_reduces_balance(self, make_order, order_service, actor):
        order = make_order()
        order = order_service.record_payment(str(order.id), Decimal("400.00"), actor)
        assert order.advance_paid == Decimal("900.00")
        assert order.balance_amount == Decimal("600.00")
        assert order.balance_paid_date is None

    def test_full_payment_stamps_date(self, make_order, order_service, actor):
        order = make_order()
        order = order_service.record_payment(str(order.id), Decimal("1000.00"), actor)
        assert order.balance_amount == Decimal("0.00")
        assert order.balance_paid_date is not None

    def test_overpayment_rejected(self, make_order, order_service, actor):
        order = make_order()
        with pytest.raises(InvalidPayment):
            order_service.record_payment(str(order.id), Decimal("1000.01"), actor)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_search_by_customer_name(self, make_order, order_service):
        order = make_order()
        assert [o.id for o in order_service.search_orders("arjun")] == [order.id]

    def test_blank_search(self, make_order, order_service):
        make_order()
        assert order_service.search_orders("  ") == []

    def test_history_of_unknown_order(self, order_service):
        with pytest.raises(OrderNotFound):
            order_service.get_status_history(str(uuid4()))

    def test_customer_orders(self, make_order, order_service, customer):
        first, second = make_order(), make_order()
        ids = {o.id for o in order_service.list_customer_orders(str(customer.id))}
        assert ids == {first.id, second.id}

    def test_workflow_stats(self, make_order, order_service, actor):
        make_order()
        confirmed = make_order()
        order_service.update_status(str(confirmed.id), OrderStatus.CONFIRMED, actor)

        stats = order_service.get_workflow_stats()

        assert stats["total"] == 2
        assert stats["by_status"]["pending"] == 1
        assert stats["by_status"]["confirmed"] == 1
        assert stats["by_status"]["delivered"] == 0
        assert stats["by_workflow_stage"]["unassigned"] == 2
        assert stats["by_workflow_stage"]["approved"] == 0
