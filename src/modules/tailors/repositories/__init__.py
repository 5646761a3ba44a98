"""Tailor repositories package."""

from modules.tailors.repositories.django_repository import TailorDjangoRepository
from modules.tailors.repositories.interfaces import ITailorRepository

__all__ = ["ITailorRepository", "TailorDjangoRepository"]
