"""Customer domain exceptions.

Raised by the service layer; the API layer renders them through the
failure envelope using their ``code`` and ``http_status``.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class CustomerNotFound(NotFoundError):
    """The requested customer does not exist."""
