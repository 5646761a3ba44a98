"""Helpers shared by the DRF views of every module.

Views delegate to services and translate the outcome into the
``ServiceResult`` envelope.  Domain exceptions map onto their declared
HTTP status; pydantic validation errors become 400; storage errors are
logged and reported as ``storage_error`` (500).  Anything else propagates
to Django's error handling.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import structlog
from django.db import DatabaseError
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.serializers import BaseSerializer

from modules.core.context import ActorContext
from modules.core.exceptions import DomainError
from modules.core.results import ServiceResult

logger = structlog.get_logger(__name__)


class ServiceAPIMixin:
    """Mixin for ViewSets exposing a service through the envelope."""

    def get_actor(self) -> ActorContext:
        from modules.staff.services import actor_for_user

        return actor_for_user(self.request.user)  # type: ignore[attr-defined]

    def envelope(self, data: Any = None, status_code: int = status.HTTP_200_OK) -> Response:
        return Response(ServiceResult.ok(data).to_payload(), status=status_code)

    def failure(self, error: str, code: str, status_code: int) -> Response:
        return Response(ServiceResult.fail(error, code).to_payload(), status=status_code)

    def run(
        self,
        operation: Callable[[], Any],
        *,
        serializer_class: Optional[type[BaseSerializer]] = None,
        many: bool = False,
        status_code: int = status.HTTP_200_OK,
    ) -> Response:
        """Execute ``operation`` and render its result (or failure)."""
        try:
            result = operation()
        except DomainError as exc:
            logger.info(
                "api.domain_error",
                code=exc.code,
                error=str(exc),
                view=type(self).__name__,
            )
            return self.failure(str(exc), exc.code, exc.http_status)
        except PydanticValidationError as exc:
            messages = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
                for err in exc.errors()
            )
            return self.failure(messages, "validation_error", status.HTTP_400_BAD_REQUEST)
        except DatabaseError as exc:
            logger.exception("api.storage_error", view=type(self).__name__)
            return self.failure(
                f"Storage error: {exc}",
                "storage_error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if serializer_class is not None and result is not None:
            data = serializer_class(result, many=many).data
        else:
            data = result
        return self.envelope(data, status_code)
