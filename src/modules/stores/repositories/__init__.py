"""Store repositories package."""

from modules.stores.repositories.django_repository import StoreDjangoRepository
from modules.stores.repositories.interfaces import IStoreRepository

__all__ = ["IStoreRepository", "StoreDjangoRepository"]
