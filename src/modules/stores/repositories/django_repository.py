"""Django ORM implementation of the store repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.stores.models import Store
from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)


class StoreDjangoRepository(IStoreRepository):
    def get_by_id(self, id: str) -> Optional[Store]:
        try:
            return Store.objects.select_related("manager").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Store]:
        queryset = Store.objects.select_related("manager")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Store) -> Store:
        entity.save()
        logger.info("store.saved", store_id=str(entity.id), code=entity.code)
        return entity

    def get_by_code(self, code: str) -> Optional[Store]:
        return Store.objects.filter(code=code).first()
