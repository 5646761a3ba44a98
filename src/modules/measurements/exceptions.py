"""Measurement domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class MeasurementNotFound(NotFoundError):
    """No measurement record matches the request."""
