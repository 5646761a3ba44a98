"""Error taxonomy shared by every module.

Services raise subclasses of ``DomainError``; the API layer turns them
into the ``{"success": false, "error": ...}`` envelope using ``code``
and ``http_status``.  DRF's own exceptions (authentication, parsing,
serializer validation) are rendered in the same envelope by
``envelope_exception_handler``.
"""

from __future__ import annotations

from typing import Any

import structlog
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for business errors surfaced to API clients."""

    code = "domain_error"
    http_status = 400


class ValidationFailed(DomainError):
    """Input rejected before any storage call was attempted."""

    code = "validation_error"
    http_status = 400


class NotFoundError(DomainError):
    """A single-row lookup returned nothing."""

    code = "not_found"
    http_status = 404


class ConflictError(DomainError):
    """The request conflicts with the current state of a record."""

    code = "conflict"
    http_status = 409


class BusinessRuleViolation(DomainError):
    """A workflow or capacity rule forbids the operation."""

    code = "business_rule_violation"
    http_status = 422


class IdentifierSpaceExhausted(DomainError):
    """No free human-readable identifier was found within the attempt budget."""

    code = "identifier_space_exhausted"
    http_status = 503


def envelope_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """DRF exception handler rendering errors as the failure envelope.

    ``errors`` keeps the per-field details DRF produces so clients can
    highlight individual form fields.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    errors = _flatten_errors(response.data)
    message = errors[0]["detail"] if errors else "Request failed."
    code = getattr(exc, "default_code", "error")

    logger.warning(
        "api.request_failed",
        status_code=response.status_code,
        code=code,
    )
    response.data = {
        "success": False,
        "error": message,
        "code": code,
        "errors": errors,
    }
    return response


def _flatten_errors(data: Any, field: str | None = None) -> list[dict[str, str]]:
    if isinstance(data, dict):
        flattened: list[dict[str, str]] = []
        for key, value in data.items():
            nested_field = field if key in {"detail", "non_field_errors"} else key
            flattened.extend(_flatten_errors(value, nested_field))
        return flattened
    if isinstance(data, list):
        flattened = []
        for item in data:
            flattened.extend(_flatten_errors(item, field))
        return flattened

    entry = {
        "code": str(getattr(data, "code", "error")),
        "detail": f"{field}: {data}" if field else str(data),
    }
    return [entry]
