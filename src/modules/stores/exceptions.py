"""Store domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError


class StoreNotFound(NotFoundError):
    """The requested store does not exist."""


class StoreAlreadyExists(ConflictError):
    """A store with the same code already exists."""


class InactiveStore(BusinessRuleViolation):
    """Orders cannot be taken for a closed branch."""

    code = "inactive_store"
