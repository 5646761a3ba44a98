"""Order domain exceptions.

Raised by the workflow state machine and the service layer.  The API
layer renders them through the failure envelope using ``code`` and
``http_status``.
"""

from __future__ import annotations

from modules.core.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    NotFoundError,
    ValidationFailed,
)


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""


class InvalidOrderStatus(BusinessRuleViolation):
    """The requested status change is not allowed from the current state."""

    code = "invalid_status_transition"


class InvalidWorkflowTransition(BusinessRuleViolation):
    """The production event does not apply to the current workflow stage."""

    code = "invalid_workflow_transition"


class StaleOrderState(ConflictError):
    """The order changed since the caller last read it."""

    code = "stale_order_state"


class InvalidMeasurementReference(ValidationFailed):
    """The referenced measurement record belongs to another customer."""


class InvalidPayment(ValidationFailed):
    """A payment amount is not acceptable for the order."""

    code = "invalid_payment"
