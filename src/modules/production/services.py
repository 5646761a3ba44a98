"""Assignment and quality-check engine.

Every command runs in one transaction and takes row locks in a fixed
order: order, then assignment, then tailor.  Order status and workflow
stage are changed through ``OrderService.apply_workflow_event`` only, so
the history row and the outbox events of the order are written by the
same code path as for status changes made by sales staff.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.core.context import ActorContext
from modules.orders.constants import WorkflowEvent
from modules.production.constants import AssignmentStatus
from modules.production.events import OrderAssigned, QualityCheckRecorded
from modules.production.exceptions import (
    AssignmentNotFound,
    InvalidAssignmentTransition,
    OrderAlreadyAssigned,
    OrderNotAssignable,
    QualityCheckNotFound,
)
from modules.production.models import OrderAssignment, QualityCheck
from modules.production.quality import quality_check_passed
from modules.tailors.exceptions import TailorAtCapacity, TailorNotFound, TailorUnavailable

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.services import OrderService
    from modules.production.dtos import QualityCheckDTO
    from modules.production.repositories.interfaces import (
        IAssignmentRepository,
        IQualityCheckRepository,
    )
    from modules.tailors.models import Tailor
    from modules.tailors.repositories.interfaces import ITailorRepository

logger = structlog.get_logger(__name__)


def _lock_tailor(repository: ITailorRepository, tailor_id: Any) -> Tailor:
    tailor = repository.get_for_update(str(tailor_id))
    if not tailor:
        raise TailorNotFound(f"Tailor {tailor_id} not found.")
    return tailor


class AssignmentService:
    """Hands orders to tailors and follows the stitching work."""

    def __init__(
        self,
        assignment_repository: IAssignmentRepository,
        tailor_repository: ITailorRepository,
        order_service: OrderService,
    ) -> None:
        self._repo = assignment_repository
        self._tailor_repo = tailor_repository
        self._orders = order_service

    @transaction.atomic
    def assign_order_to_tailor(
        self,
        order_id: str,
        tailor_id: str,
        actor: ActorContext,
        estimated_time: Optional[str] = None,
        notes: str = "",
    ) -> OrderAssignment:
        """Assign an order to a tailor.

        Moves the order to stage ``assigned`` / status ``confirmed`` and
        counts the order against the tailor's load.

        Raises:
            OrderNotFound / TailorNotFound: unknown ids.
            OrderNotAssignable: the order is delivered or cancelled.
            OrderAlreadyAssigned: the order has an active assignment.
            TailorUnavailable: the tailor is marked unavailable.
            TailorAtCapacity: the tailor has ``max_concurrent_orders`` open.
            InvalidWorkflowTransition: the order's stage forbids assignment.
        """
        order = self._orders.lock_order(order_id)
        if order.is_terminal:
            raise OrderNotAssignable(
                f"Order {order.order_number} is {order.status} and cannot be assigned."
            )
        if self._repo.active_for_order(str(order.id)):
            raise OrderAlreadyAssigned(
                f"Order {order.order_number} already has an active assignment."
            )

        tailor = _lock_tailor(self._tailor_repo, tailor_id)
        if not tailor.is_available:
            raise TailorUnavailable(f"Tailor {tailor.tailor_code} is not available.")
        if not tailor.has_capacity:
            raise TailorAtCapacity(
                f"Tailor {tailor.tailor_code} already has "
                f"{tailor.current_order_count} of {tailor.max_concurrent_orders} orders."
            )

        assignment = OrderAssignment(
            order=order,
            tailor=tailor,
            status=AssignmentStatus.ASSIGNED,
            assigned_at=timezone.now(),
            assigned_by_id=actor.user_id,
            estimated_completion_time=estimated_time or "",
            notes=notes,
        )
        self._repo.save(assignment)

        order.assigned_tailor = tailor
        order.add_domain_event(
            OrderAssigned(
                aggregate_id=order.id,
                order_number=order.order_number,
                assignment_id=str(assignment.id),
                tailor_id=str(tailor.id),
                tailor_code=tailor.tailor_code,
            )
        )
        self._orders.apply_workflow_event(
            order,
            WorkflowEvent.ASSIGNED,
            actor,
            notes or f"Assigned to tailor {tailor.tailor_code}",
        )

        tailor.take_order()
        self._tailor_repo.save(tailor)

        logger.info(
            "assignment.created",
            assignment_id=str(assignment.id),
            order_id=str(order.id),
            tailor_id=str(tailor.id),
            actor=actor.display_name,
        )
        return self._repo.get_by_id(str(assignment.id)) or assignment

    @transaction.atomic
    def start_assignment(self, assignment_id: str, actor: ActorContext) -> OrderAssignment:
        """``assigned -> in_progress``; the order enters stage ``in_progress``."""
        order, assignment = self._lock(assignment_id)
        if assignment.status != AssignmentStatus.ASSIGNED:
            raise InvalidAssignmentTransition(
                f"Assignment is {assignment.status}; only assigned work can be started."
            )

        assignment.status = AssignmentStatus.IN_PROGRESS
        assignment.started_at = timezone.now()
        self._repo.save(assignment)
        self._orders.apply_workflow_event(order, WorkflowEvent.STITCHING_STARTED, actor)

        logger.info(
            "assignment.started",
            assignment_id=str(assignment.id),
            order_id=str(order.id),
        )
        return self._repo.get_by_id(str(assignment.id)) or assignment

    @transaction.atomic
    def complete_stitching(
        self, assignment_id: str, actor: ActorContext, notes: str = ""
    ) -> OrderAssignment:
        """Close the assignment; the order becomes ``ready`` for inspection.

        The tailor's open count drops and the completion is counted.
        """
        order, assignment = self._lock(assignment_id)
        if not assignment.is_active:
            raise InvalidAssignmentTransition("Assignment is already completed.")

        assignment.status = AssignmentStatus.COMPLETED
        assignment.completed_at = timezone.now()
        if notes:
            assignment.notes = f"{assignment.notes}\n{notes}" if assignment.notes else notes
        self._repo.save(assignment)
        self._orders.apply_workflow_event(
            order, WorkflowEvent.STITCHING_COMPLETED, actor, notes or "Stitching completed"
        )

        tailor = _lock_tailor(self._tailor_repo, assignment.tailor_id)
        tailor.release_order(completed=True)
        self._tailor_repo.save(tailor)

        logger.info(
            "assignment.completed",
            assignment_id=str(assignment.id),
            order_id=str(order.id),
            tailor_id=str(tailor.id),
        )
        return self._repo.get_by_id(str(assignment.id)) or assignment

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_assignments(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderAssignment]:
        return self._repo.list(filters)

    def list_tailor_assignments(
        self, tailor_id: str, active_only: bool = False
    ) -> List[OrderAssignment]:
        if not self._tailor_repo.get_by_id(tailor_id):
            raise TailorNotFound(f"Tailor {tailor_id} not found.")
        return self._repo.list_for_tailor(tailor_id, active_only=active_only)

    def get_assignment(self, assignment_id: str) -> OrderAssignment:
        assignment = self._repo.get_by_id(assignment_id)
        if not assignment:
            raise AssignmentNotFound(f"Assignment {assignment_id} not found.")
        return assignment

    def _lock(self, assignment_id: str) -> tuple[Order, OrderAssignment]:
        found = self.get_assignment(assignment_id)
        order = self._orders.lock_order(str(found.order_id))
        assignment = self._repo.get_for_update(str(found.id))
        if not assignment:
            raise AssignmentNotFound(f"Assignment {assignment_id} not found.")
        return order, assignment


class QualityCheckService:
    def __init__(
        self,
        quality_check_repository: IQualityCheckRepository,
        tailor_repository: ITailorRepository,
        order_service: OrderService,
    ) -> None:
        self._repo = quality_check_repository
        self._tailor_repo = tailor_repository
        self._orders = order_service

    @transaction.atomic
    def perform_quality_check(self, dto: QualityCheckDTO, actor: ActorContext) -> QualityCheck:
        """Record an inspection of a stitched order.

        A pass approves the order; a failure sends it back to production
        (stage ``quality_check``, status ``in_progress``) where it can be
        assigned again.  The score feeds the tailor's running rating.

        Raises:
            OrderNotFound: unknown order.
            InvalidWorkflowTransition: stitching is not complete.
        """
        order = self._orders.lock_order(str(dto.order_id))
        passed = quality_check_passed(
            dto.overall_quality, dto.stitching_quality, dto.finishing_quality
        )

        check = QualityCheck(
            order=order,
            tailor_id=order.assigned_tailor_id,
            checked_by_id=actor.user_id,
            overall_quality=dto.overall_quality,
            stitching_quality=dto.stitching_quality,
            finishing_quality=dto.finishing_quality,
            measurement_accuracy=dto.measurement_accuracy,
            design_adherence=dto.design_adherence,
            passed=passed,
            defects_found=list(dto.defects_found),
            corrective_actions=dto.corrective_actions,
            notes=dto.notes,
            check_date=timezone.now(),
        )
        self._repo.save(check)

        order.add_domain_event(
            QualityCheckRecorded(
                aggregate_id=order.id,
                order_number=order.order_number,
                quality_check_id=str(check.id),
                passed=passed,
                overall_quality=str(dto.overall_quality),
            )
        )
        if passed:
            event, default_note = WorkflowEvent.QUALITY_PASSED, "Quality check passed"
        else:
            event, default_note = WorkflowEvent.QUALITY_FAILED, "Quality check failed"
        self._orders.apply_workflow_event(order, event, actor, dto.notes or default_note)

        if order.assigned_tailor_id:
            tailor = _lock_tailor(self._tailor_repo, order.assigned_tailor_id)
            tailor.add_quality_score(check.score)
            self._tailor_repo.save(tailor)

        logger.info(
            "quality_check.recorded",
            quality_check_id=str(check.id),
            order_id=str(order.id),
            passed=passed,
            score=str(check.score),
        )
        return self._repo.get_by_id(str(check.id)) or check

    def list_order_quality_checks(self, order_id: str) -> List[QualityCheck]:
        self._orders.get_order(order_id)
        return self._repo.list_for_order(order_id)

    def get_quality_check(self, check_id: str) -> QualityCheck:
        check = self._repo.get_by_id(check_id)
        if not check:
            raise QualityCheckNotFound(f"Quality check {check_id} not found.")
        return check


class AssignmentReleaseService:
    """Closes the open assignment of an order that is being cancelled.

    Plugged into ``OrderService`` so that cancellation, which the order
    service owns, also frees the tailor.
    """

    def __init__(
        self,
        assignment_repository: IAssignmentRepository,
        tailor_repository: ITailorRepository,
    ) -> None:
        self._repo = assignment_repository
        self._tailor_repo = tailor_repository

    @classmethod
    def default(cls) -> AssignmentReleaseService:
        from modules.production.repositories import AssignmentDjangoRepository
        from modules.tailors.repositories import TailorDjangoRepository

        return cls(AssignmentDjangoRepository(), TailorDjangoRepository())

    def release_for_cancelled_order(self, order: Order, actor: ActorContext) -> None:
        """Runs inside the caller's transaction, with the order locked."""
        assignment = self._repo.active_for_order(str(order.id))
        if assignment is None:
            return

        assignment.status = AssignmentStatus.COMPLETED
        assignment.completed_at = timezone.now()
        assignment.released = True
        assignment.notes = (
            f"{assignment.notes}\nOrder cancelled" if assignment.notes else "Order cancelled"
        )
        self._repo.save(assignment)

        tailor = _lock_tailor(self._tailor_repo, assignment.tailor_id)
        tailor.release_order(completed=False)
        self._tailor_repo.save(tailor)

        logger.info(
            "assignment.released",
            assignment_id=str(assignment.id),
            order_id=str(order.id),
            tailor_id=str(tailor.id),
            actor=actor.display_name,
        )


def build_assignment_service() -> AssignmentService:
    from modules.orders.services import build_order_service
    from modules.production.repositories import AssignmentDjangoRepository
    from modules.tailors.repositories import TailorDjangoRepository

    return AssignmentService(
        AssignmentDjangoRepository(), TailorDjangoRepository(), build_order_service()
    )


def build_quality_check_service() -> QualityCheckService:
    from modules.orders.services import build_order_service
    from modules.production.repositories import QualityCheckDjangoRepository
    from modules.tailors.repositories import TailorDjangoRepository

    return QualityCheckService(
        QualityCheckDjangoRepository(), TailorDjangoRepository(), build_order_service()
    )
