"""Dashboard repositories package."""

from modules.dashboard.repositories.django_repository import DashboardDjangoRepository
from modules.dashboard.repositories.interfaces import IDashboardRepository

__all__ = ["DashboardDjangoRepository", "IDashboardRepository"]
