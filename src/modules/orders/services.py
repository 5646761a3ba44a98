"""Order service layer (Use Cases).

Orchestrates order creation and every change of ``status`` and
``workflow_stage``.  All write operations are atomic: the service defines
the unit-of-work boundary, locks the order row first, and writes the
order, its history row and its outbox events in the same transaction.

Business rules enforced:
- Customer must exist; store must exist and be active.
- Expected delivery date is derived from order type and priority.
- Order numbers are checked against existing orders before use.
- A referenced measurement must belong to the ordering customer and is
  copied into the order.
- Status changes follow ``modules.orders.workflow``; each one appends a
  history row carrying the acting staff member.
- ``actual_delivery_date`` is set exactly when an order is delivered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from modules.core.context import ActorContext
from modules.core.identifiers import generate_order_id
from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import OrderStatus, WorkflowEvent, WorkflowStage
from modules.orders.delivery import calculate_delivery_date
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import (
    InvalidMeasurementReference,
    InvalidPayment,
    OrderNotFound,
    StaleOrderState,
)
from modules.orders.models import Order
from modules.orders.workflow import (
    WORKFLOW_TRANSITIONS,
    OrderState,
    apply_event,
    transition_status,
)
from modules.stores.exceptions import InactiveStore, StoreNotFound

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.measurements.repositories.interfaces import IMeasurementRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import OrderStatusHistory
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.stores.models import Store
    from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)

# Timestamp stamped on the order when a workflow event is applied.
_EVENT_TIMESTAMPS: Dict[str, str] = {
    WorkflowEvent.STITCHING_STARTED: "stitching_started_at",
    WorkflowEvent.STITCHING_COMPLETED: "stitching_completed_at",
    WorkflowEvent.QUALITY_PASSED: "quality_checked_at",
    WorkflowEvent.QUALITY_FAILED: "quality_checked_at",
}


class AssignmentReleaser(Protocol):
    """Closes production work left open on an order being cancelled."""

    def release_for_cancelled_order(self, order: Order, actor: ActorContext) -> None: ...


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).  This is the
    only code that writes ``Order.status`` and ``Order.workflow_stage``;
    the production engine goes through ``apply_workflow_event``.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        store_repository: IStoreRepository,
        measurement_repository: IMeasurementRepository,
        assignment_releaser: Optional[AssignmentReleaser] = None,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._store_repo = store_repository
        self._measurement_repo = measurement_repository
        self._assignment_releaser = assignment_releaser

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO, actor: ActorContext) -> Order:
        """Place a new order in ``pending`` status.

        Raises:
            InvalidPayment: amounts are inconsistent (checked first).
            CustomerNotFound: customer does not exist.
            StoreNotFound / InactiveStore: store missing or closed.
            InvalidMeasurementReference: measurement of another customer.
            IdentifierSpaceExhausted: no free order number for today.
        """
        balance = dto.resolved_balance(settings.OMS_ENFORCE_BALANCE)

        log = logger.bind(customer_id=str(dto.customer_id), actor=actor.display_name)
        log.info("order.creation_started")

        customer = self._customer_repo.get_by_id(str(dto.customer_id))
        if not customer:
            raise CustomerNotFound(f"Customer {dto.customer_id} not found.")

        store = self._resolve_store(dto)

        measurement = None
        snapshot = None
        if dto.measurement_id is not None:
            measurement = self._measurement_repo.get_by_id(str(dto.measurement_id))
            if not measurement or measurement.customer_id != customer.id:
                raise InvalidMeasurementReference(
                    f"Measurement {dto.measurement_id} does not belong to "
                    f"customer {customer.customer_code}."
                )
            snapshot = measurement.snapshot()

        now = timezone.now()
        order_number = generate_order_id(
            store.code, self._order_repo.number_exists, now=now
        )

        order = Order(
            order_number=order_number,
            customer=customer,
            store=store,
            order_type=dto.order_type,
            priority=dto.priority,
            status=OrderStatus.PENDING,
            garment_type=dto.garment_type,
            fabric_type=dto.fabric_type,
            fabric_color=dto.fabric_color,
            fabric_quantity=dto.fabric_quantity,
            fabric_unit=dto.fabric_unit,
            style_images=list(dto.style_images),
            fabric_images=list(dto.fabric_images),
            special_instructions=dto.special_instructions,
            measurement=measurement,
            measurement_snapshot=snapshot,
            total_amount=dto.total_amount,
            advance_paid=dto.advance_paid,
            balance_amount=balance,
            advance_paid_date=now if dto.advance_paid > 0 else None,
            order_date=now,
            expected_delivery_date=calculate_delivery_date(
                dto.order_type, dto.priority, now=now
            ),
            fitting_date=dto.fitting_date,
            created_by_id=actor.user_id,
            notes=dto.notes,
        )
        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                order_number=order_number,
                customer_id=str(customer.id),
                expected_delivery_date=order.expected_delivery_date.isoformat(),
            )
        )
        self._order_repo.save(order)

        self._customer_repo.append_order_number(str(customer.id), order_number)
        self._order_repo.add_history(
            order, old_status=None, actor=actor, notes="Order created"
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            order_number=order_number,
            expected_delivery_date=order.expected_delivery_date.isoformat(),
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(
        self,
        order_id: str,
        new_status: str,
        actor: ActorContext,
        notes: str = "",
        expected_status: Optional[str] = None,
    ) -> Order:
        """Apply a caller-requested status change.

        Acquires a row-level lock on the order before validating the
        transition.  ``cancelled`` is routed through ``cancel_order`` so
        that open assignments are released.

        Raises:
            OrderNotFound: order does not exist.
            StaleOrderState: ``expected_status`` no longer matches.
            InvalidOrderStatus: transition is not allowed.
        """
        if new_status == OrderStatus.CANCELLED:
            return self.cancel_order(
                order_id, actor, notes=notes, expected_status=expected_status
            )

        order = self._lock(order_id, expected_status)
        old_state = order.state
        new_state = transition_status(old_state, new_status)

        order.apply_state(new_state)
        if new_state.status == OrderStatus.DELIVERED:
            order.actual_delivery_date = timezone.now()

        self._record_change(order, old_state, actor, notes)
        logger.info(
            "order.status_updated",
            order_id=str(order.id),
            old_status=old_state.status,
            new_status=new_state.status,
            workflow_stage=new_state.workflow_stage,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def cancel_order(
        self,
        order_id: str,
        actor: ActorContext,
        notes: str = "",
        expected_status: Optional[str] = None,
    ) -> Order:
        """Cancel an order and release any active tailor assignment.

        Raises:
            OrderNotFound: order does not exist.
            StaleOrderState: ``expected_status`` no longer matches.
            InvalidOrderStatus: cancellation not allowed from current status.
        """
        order = self._lock(order_id, expected_status)
        old_state = order.state
        new_state = transition_status(old_state, OrderStatus.CANCELLED)

        if self._assignment_releaser is not None:
            self._assignment_releaser.release_for_cancelled_order(order, actor)

        order.apply_state(new_state)
        self._record_change(order, old_state, actor, notes or "Order cancelled")
        logger.info("order.cancelled", order_id=str(order.id), old_status=old_state.status)
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def schedule_fitting(
        self,
        order_id: str,
        fitting_date: datetime,
        actor: ActorContext,
        notes: str = "",
    ) -> Order:
        """Book (or move) the fitting appointment.

        The first booking moves the order to ``fitting_scheduled``;
        rescheduling only changes the date.
        """
        order = self._lock(order_id)
        order.fitting_date = fitting_date

        if order.status == OrderStatus.FITTING_SCHEDULED:
            self._order_repo.save(order)
            logger.info(
                "order.fitting_rescheduled",
                order_id=str(order.id),
                fitting_date=fitting_date.isoformat(),
            )
        else:
            old_state = order.state
            order.apply_state(transition_status(old_state, OrderStatus.FITTING_SCHEDULED))
            self._record_change(
                order, old_state, actor, notes or f"Fitting on {fitting_date:%Y-%m-%d %H:%M}"
            )
            logger.info(
                "order.fitting_scheduled",
                order_id=str(order.id),
                fitting_date=fitting_date.isoformat(),
            )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def record_payment(self, order_id: str, amount: Decimal, actor: ActorContext) -> Order:
        """Apply a payment towards the outstanding balance.

        Raises:
            InvalidPayment: non-positive amount, more than the balance, or
                a cancelled order.
        """
        order = self._lock(order_id)
        if order.status == OrderStatus.CANCELLED:
            raise InvalidPayment("Payments cannot be recorded on a cancelled order.")
        if amount <= 0:
            raise InvalidPayment("Payment amount must be positive.")
        if amount > order.balance_amount:
            raise InvalidPayment(
                f"Payment {amount} exceeds the outstanding balance {order.balance_amount}."
            )

        now = timezone.now()
        order.advance_paid += amount
        order.balance_amount -= amount
        if order.advance_paid_date is None:
            order.advance_paid_date = now
        if order.balance_amount == 0:
            order.balance_paid_date = now
        self._order_repo.save(order)

        logger.info(
            "order.payment_recorded",
            order_id=str(order.id),
            amount=str(amount),
            balance=str(order.balance_amount),
            actor=actor.display_name,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def complete_order(self, order_id: str, actor: ActorContext, notes: str = "") -> Order:
        """Hand an approved order over to the customer.

        Raises:
            InvalidWorkflowTransition: the order has not passed quality check.
        """
        order = self._lock(order_id)
        self.apply_workflow_event(
            order, WorkflowEvent.ORDER_COMPLETED, actor, notes or "Order delivered"
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    def apply_workflow_event(
        self,
        order: Order,
        event: str,
        actor: ActorContext,
        notes: str = "",
    ) -> Order:
        """Apply a production event to an order already locked by the caller.

        Must run inside the caller's transaction.  Events that carry a
        status append a history row even when the status value itself is
        unchanged (e.g. quality approval of a ``ready`` order).
        """
        old_state = order.state
        new_state = apply_event(old_state, event)
        now = timezone.now()

        order.apply_state(new_state)
        stamp = _EVENT_TIMESTAMPS.get(event)
        if stamp:
            setattr(order, stamp, now)
        if new_state.status == OrderStatus.DELIVERED:
            order.actual_delivery_date = now

        if WORKFLOW_TRANSITIONS[event].status is not None:
            self._record_change(order, old_state, actor, notes)
        else:
            self._order_repo.save(order)

        logger.info(
            "order.workflow_event_applied",
            order_id=str(order.id),
            workflow_event=str(event),
            status=new_state.status,
            workflow_stage=new_state.workflow_stage,
        )
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def get_by_number(self, order_number: str) -> Order:
        order = self._order_repo.get_by_number(order_number)
        if not order:
            raise OrderNotFound(f"Order {order_number} not found.")
        return order

    def lock_order(self, order_id: str) -> Order:
        """Row-locked order for callers running their own transaction."""
        return self._lock(order_id)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return a list of orders, optionally filtered."""
        return self._order_repo.list(filters)

    def search_orders(self, query: str) -> List[Order]:
        query = (query or "").strip()
        if not query:
            return []
        return self._order_repo.search(query)

    def list_customer_orders(self, customer_id: str) -> List[Order]:
        if not self._customer_repo.get_by_id(customer_id):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        return self._order_repo.list({"customer_id": customer_id})

    def get_status_history(self, order_id: str) -> List[OrderStatusHistory]:
        if not self._order_repo.get_by_id(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")
        return self._order_repo.history(order_id)

    def get_workflow_stats(self) -> Dict[str, Any]:
        """Order counts per status and per workflow stage."""
        by_status = self._order_repo.count_by("status")
        by_stage = self._order_repo.count_by("workflow_stage")
        return {
            "total": sum(by_status.values()),
            "by_status": {value: by_status.get(value, 0) for value in OrderStatus.values},
            "by_workflow_stage": {
                "unassigned": by_stage.get(None, 0),
                **{value: by_stage.get(value, 0) for value in WorkflowStage.values},
            },
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock(self, order_id: str, expected_status: Optional[str] = None) -> Order:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if expected_status is not None and order.status != expected_status:
            logger.warning(
                "order.stale_state",
                order_id=str(order.id),
                expected_status=expected_status,
                current_status=order.status,
            )
            raise StaleOrderState(
                f"Order {order.order_number} is {order.status}, not {expected_status}."
            )
        return order

    def _resolve_store(self, dto: CreateOrderDTO) -> Store:
        if dto.store_id is not None:
            store = self._store_repo.get_by_id(str(dto.store_id))
        else:
            store = self._store_repo.get_by_code(dto.store_code or "")
        if not store:
            raise StoreNotFound(f"Store {dto.store_id or dto.store_code} not found.")
        if not store.is_active:
            raise InactiveStore(f"Store {store.code} is not active.")
        return store

    def _record_change(
        self,
        order: Order,
        old_state: OrderState,
        actor: ActorContext,
        notes: str,
    ) -> None:
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                order_number=order.order_number,
                old_status=old_state.status,
                new_status=order.status,
                workflow_stage=order.workflow_stage,
                changed_by=actor.display_name,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order, old_status=old_state.status, actor=actor, notes=notes
        )


def build_order_service() -> OrderService:
    """``OrderService`` wired to the Django repositories."""
    from modules.customers.repositories import CustomerDjangoRepository
    from modules.measurements.repositories import MeasurementDjangoRepository
    from modules.orders.repositories import OrderDjangoRepository
    from modules.production.services import AssignmentReleaseService
    from modules.stores.repositories import StoreDjangoRepository

    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        store_repository=StoreDjangoRepository(),
        measurement_repository=MeasurementDjangoRepository(),
        assignment_releaser=AssignmentReleaseService.default(),
    )
