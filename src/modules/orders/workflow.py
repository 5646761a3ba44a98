"""Order workflow state machine.

An order carries two coupled dimensions:

- ``status``: what the customer sees.  Sales staff move it explicitly,
  within ``STATUS_TRANSITIONS``.
- ``workflow_stage``: where the garment is in production.  It only moves
  through ``WORKFLOW_TRANSITIONS`` events raised by assignments and
  quality checks, and some events force a ``status`` as well.

Both are held together in an immutable ``OrderState`` and changed only by
``transition_status`` and ``apply_event``.  The functions are pure; the
order service persists the result together with its history row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from modules.orders.constants import (
    TERMINAL_STATUSES,
    OrderStatus,
    WorkflowEvent,
    WorkflowStage,
)
from modules.orders.exceptions import InvalidOrderStatus, InvalidWorkflowTransition


@dataclass(frozen=True)
class OrderState:
    status: str
    workflow_stage: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class WorkflowTransition:
    sources: frozenset[Optional[str]]
    target_stage: str
    status: Optional[str] = None


STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset(
        {
            OrderStatus.IN_PROGRESS,
            OrderStatus.FITTING_SCHEDULED,
            OrderStatus.READY,
            OrderStatus.CANCELLED,
        }
    ),
    OrderStatus.IN_PROGRESS: frozenset(
        {OrderStatus.FITTING_SCHEDULED, OrderStatus.READY, OrderStatus.CANCELLED}
    ),
    OrderStatus.FITTING_SCHEDULED: frozenset(
        {OrderStatus.IN_PROGRESS, OrderStatus.READY, OrderStatus.CANCELLED}
    ),
    OrderStatus.READY: frozenset(
        {OrderStatus.FITTING_SCHEDULED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

WORKFLOW_TRANSITIONS: dict[str, WorkflowTransition] = {
    WorkflowEvent.ASSIGNED: WorkflowTransition(
        sources=frozenset({None, WorkflowStage.QUALITY_CHECK}),
        target_stage=WorkflowStage.ASSIGNED,
        status=OrderStatus.CONFIRMED,
    ),
    WorkflowEvent.STITCHING_STARTED: WorkflowTransition(
        sources=frozenset({WorkflowStage.ASSIGNED}),
        target_stage=WorkflowStage.IN_PROGRESS,
    ),
    WorkflowEvent.STITCHING_COMPLETED: WorkflowTransition(
        sources=frozenset({WorkflowStage.ASSIGNED, WorkflowStage.IN_PROGRESS}),
        target_stage=WorkflowStage.STITCHING_COMPLETE,
        status=OrderStatus.READY,
    ),
    WorkflowEvent.QUALITY_PASSED: WorkflowTransition(
        sources=frozenset({WorkflowStage.STITCHING_COMPLETE}),
        target_stage=WorkflowStage.APPROVED,
        status=OrderStatus.READY,
    ),
    WorkflowEvent.QUALITY_FAILED: WorkflowTransition(
        sources=frozenset({WorkflowStage.STITCHING_COMPLETE}),
        target_stage=WorkflowStage.QUALITY_CHECK,
        status=OrderStatus.IN_PROGRESS,
    ),
    WorkflowEvent.ORDER_COMPLETED: WorkflowTransition(
        sources=frozenset({WorkflowStage.APPROVED}),
        target_stage=WorkflowStage.COMPLETED,
        status=OrderStatus.DELIVERED,
    ),
}


def allowed_statuses(state: OrderState) -> frozenset[str]:
    """Statuses a caller may request from ``state``."""
    return STATUS_TRANSITIONS.get(state.status, frozenset())


def transition_status(state: OrderState, target: str) -> OrderState:
    """Apply a caller-requested status change.

    Delivering an order that went through production requires the
    ``approved`` stage and closes the stage as ``completed``.  Orders that
    were never assigned (stage unset) are delivered from ``ready`` as is.

    Raises:
        InvalidOrderStatus: the change skips a precursor state, leaves a
            terminal state or is unknown.
    """
    if state.is_terminal:
        raise InvalidOrderStatus(
            f"Order is {state.status}; its status can no longer change."
        )
    if target not in allowed_statuses(state):
        raise InvalidOrderStatus(f"Cannot transition from {state.status} to {target}.")

    if target == OrderStatus.DELIVERED:
        if state.workflow_stage is None:
            return OrderState(status=target)
        if state.workflow_stage == WorkflowStage.APPROVED:
            return OrderState(status=target, workflow_stage=WorkflowStage.COMPLETED)
        raise InvalidOrderStatus(
            f"Cannot deliver an order at workflow stage {state.workflow_stage}; "
            "it must pass quality check first."
        )

    return OrderState(status=target, workflow_stage=state.workflow_stage)


def apply_event(state: OrderState, event: str) -> OrderState:
    """Apply a production event.

    Raises:
        InvalidWorkflowTransition: unknown event, terminal order, or the
            current stage is not a legal source for ``event``.
    """
    transition = WORKFLOW_TRANSITIONS.get(event)
    if transition is None:
        raise InvalidWorkflowTransition(f"Unknown workflow event {event!r}.")
    if state.is_terminal:
        raise InvalidWorkflowTransition(
            f"Order is {state.status}; workflow event {event} is not allowed."
        )
    if state.workflow_stage not in transition.sources:
        raise InvalidWorkflowTransition(
            f"Workflow event {event} is not allowed at stage "
            f"{state.workflow_stage or 'unassigned'}."
        )

    return OrderState(
        status=transition.status or state.status,
        workflow_stage=transition.target_stage,
    )
