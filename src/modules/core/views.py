import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.models import OutboxEvent
from modules.core.results import ServiceResult

logger = structlog.get_logger()


def _probe_database() -> Dict[str, Any]:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {}


def _probe_cache() -> Dict[str, Any]:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")
    return {}


def _probe_outbox() -> Dict[str, Any]:
    # A growing backlog means the relay task is not running.
    return OutboxEvent.objects.backlog()


PROBES: Dict[str, Callable[[], Dict[str, Any]]] = {
    "database": _probe_database,
    "cache": _probe_cache,
    "outbox": _probe_outbox,
}


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    for name, probe in PROBES.items():
        start = time.monotonic()
        try:
            details = probe()
        except Exception:
            services[name] = {"status": "down"}
            overall_healthy = False
            logger.error("health_check.probe_failed", probe=name)
            continue
        services[name] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
            **details,
        }

    logger.info(
        "health_check.completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if overall_healthy else 503,
    )


class MeView(APIView):
    """Return the actor context the API resolves for the caller.

    * No token  -> 401
    * Valid JWT -> 200 with the staff profile id (if any) and display name
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        from modules.staff.services import actor_for_user

        actor = actor_for_user(request.user)
        return Response(ServiceResult.ok(actor.model_dump(mode="json")).to_payload())
