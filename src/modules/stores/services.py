"""Store service layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.stores.exceptions import StoreAlreadyExists, StoreNotFound
from modules.stores.models import Store

if TYPE_CHECKING:
    from modules.stores.dtos import CreateStoreDTO
    from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)


class StoreService:
    def __init__(self, repository: IStoreRepository) -> None:
        self._repository = repository

    @transaction.atomic
    def create_store(self, dto: CreateStoreDTO) -> Store:
        if self._repository.get_by_code(dto.code):
            raise StoreAlreadyExists(f"Store code {dto.code} is already in use.")

        store = Store(
            code=dto.code,
            name=dto.name,
            address_street=dto.address_street,
            address_city=dto.address_city,
            address_state=dto.address_state,
            address_pin_code=dto.address_pin_code,
            phone=dto.phone,
            email=dto.email or "",
            manager_id=dto.manager_id,
        )
        self._repository.save(store)
        logger.info("store.created", store_id=str(store.id), code=store.code)
        return store

    def get_store(self, store_id: str) -> Store:
        store = self._repository.get_by_id(store_id)
        if not store:
            raise StoreNotFound(f"Store {store_id} not found.")
        return store

    def get_by_code(self, code: str) -> Store:
        store = self._repository.get_by_code(code.upper())
        if not store:
            raise StoreNotFound(f"Store {code} not found.")
        return store

    def list_stores(self, active_only: bool = False) -> List[Store]:
        return self._repository.list({"is_active": True} if active_only else None)
