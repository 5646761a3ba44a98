"""Staff domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class StaffUserNotFound(NotFoundError):
    """The requested staff user does not exist."""


class StaffUserAlreadyExists(ConflictError):
    """A staff user with the same username already exists."""
