"""Explicit description of who performs a service operation.

Every service write takes an ``ActorContext`` instead of looking up a
process-wide "current user".  ``user_id`` references ``oms_users`` and is
``None`` for system-initiated changes or accounts without a staff profile.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ActorContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: Optional[UUID] = None
    display_name: str = "system"

    @classmethod
    def system(cls) -> ActorContext:
        return cls()
