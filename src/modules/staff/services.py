"""Staff service layer.

Besides plain CRUD this module resolves authenticated accounts into the
``ActorContext`` that every write operation receives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.context import ActorContext
from modules.staff.exceptions import StaffUserAlreadyExists, StaffUserNotFound
from modules.staff.models import StaffUser
from modules.staff.repositories import StaffDjangoRepository
from modules.stores.repositories import StoreDjangoRepository
from modules.stores.services import StoreService

if TYPE_CHECKING:
    from modules.staff.dtos import CreateStaffUserDTO, UpdateStaffUserDTO
    from modules.staff.repositories.interfaces import IStaffRepository

logger = structlog.get_logger(__name__)


class StaffService:
    def __init__(self, repository: IStaffRepository) -> None:
        self._repository = repository

    @transaction.atomic
    def create_user(self, dto: CreateStaffUserDTO) -> StaffUser:
        if self._repository.get_by_username(dto.username):
            raise StaffUserAlreadyExists(f"Staff user {dto.username} already exists.")

        user = StaffUser(
            username=dto.username,
            email=dto.email or "",
            phone=dto.phone,
            role=dto.role,
            store_id=dto.store_id,
        )
        self._repository.save(user)
        logger.info("staff.created", staff_id=str(user.id), role=user.role)
        return user

    @transaction.atomic
    def update_user(self, user_id: str, dto: UpdateStaffUserDTO) -> StaffUser:
        """Change contact details, role, branch or the active flag.

        A deactivated user keeps its history but no longer acts under its
        own profile (see ``actor_for_username``).
        """
        user = self.get_user(user_id)

        fields = dto.model_fields_set
        if dto.store_id is not None:
            StoreService(StoreDjangoRepository()).get_store(str(dto.store_id))

        for field in fields:
            value = getattr(dto, field)
            if field in ("email", "phone"):
                value = value or ""
            elif value is None and field in ("role", "is_active"):
                continue
            setattr(user, field, value)

        self._repository.save(user)
        logger.info(
            "staff.updated",
            staff_id=str(user.id),
            fields=sorted(fields),
            is_active=user.is_active,
        )
        return user

    def get_user(self, user_id: str) -> StaffUser:
        user = self._repository.get_by_id(user_id)
        if not user:
            raise StaffUserNotFound(f"Staff user {user_id} not found.")
        return user

    def list_users(self, filters: Optional[Dict[str, Any]] = None) -> List[StaffUser]:
        return self._repository.list(filters)

    def actor_for_username(self, username: str) -> ActorContext:
        """Map a login name onto the acting staff profile.

        Accounts without an active staff profile still act under their
        username, with no ``user_id`` recorded.
        """
        user = self._repository.get_by_username(username)
        if user is None or not user.is_active:
            return ActorContext(display_name=username or "system")
        return ActorContext(user_id=user.id, display_name=user.username)


def actor_for_user(user: Any) -> ActorContext:
    """Build the ``ActorContext`` for a Django request user."""
    if user is None or not getattr(user, "is_authenticated", False):
        return ActorContext.system()
    return StaffService(StaffDjangoRepository()).actor_for_username(user.get_username())
