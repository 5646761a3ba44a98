"""Uniform success/failure envelope returned by the HTTP API."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ServiceResult(BaseModel, Generic[T]):
    """``{"success": bool, "data"?: T, "error"?: str, "code"?: str}``."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> ServiceResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str = "error") -> ServiceResult:
        return cls(success=False, error=error, code=code)

    def to_payload(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error, "code": self.code}
