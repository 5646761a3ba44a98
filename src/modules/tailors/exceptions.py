"""Tailor domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError


class TailorNotFound(NotFoundError):
    """The requested tailor does not exist."""


class TailorAlreadyExists(ConflictError):
    """The staff user already has a tailor profile."""


class TailorUnavailable(BusinessRuleViolation):
    """The tailor is not taking new orders."""

    code = "tailor_unavailable"


class TailorAtCapacity(BusinessRuleViolation):
    """The tailor already works on ``max_concurrent_orders`` orders."""

    code = "tailor_at_capacity"
