"""Store repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.stores.models import Store


class IStoreRepository(IRepository["Store"]):
    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Store]:
        """Retrieve a store by its short code."""
