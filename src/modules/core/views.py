import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def _probe_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    healthy = True

    try:
        services["database"] = _probe_database()
    except DatabaseError:
        services["database"] = {"status": "down"}
        healthy = False
        logger.error("health_check.database_down")

    state = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=state)

    return JsonResponse(
        {
            "status": state,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
