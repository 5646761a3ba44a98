"""Production domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError


class AssignmentNotFound(NotFoundError):
    """The requested assignment does not exist."""


class OrderAlreadyAssigned(ConflictError):
    """The order already has an active assignment."""

    code = "order_already_assigned"


class OrderNotAssignable(BusinessRuleViolation):
    """Delivered and cancelled orders cannot go to production."""

    code = "order_not_assignable"


class InvalidAssignmentTransition(BusinessRuleViolation):
    """The assignment is not in a state that allows the operation."""

    code = "invalid_assignment_transition"


class QualityCheckNotFound(NotFoundError):
    """The requested quality check does not exist."""
