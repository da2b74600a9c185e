import time
from typing import Any, Dict

import structlog
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.dynamodb import get_products_table

logger = structlog.get_logger()

SERVICE_NAME = "product-service"


def _probe_store() -> Dict[str, Any]:
    backend = settings.PRODUCTS_REPOSITORY_BACKEND
    if backend == "memory":
        return {"backend": backend, "status": "up"}

    start = time.monotonic()
    try:
        # DescribeTable: proves credentials, endpoint and table all line up.
        get_products_table().load()
    except (BotoCoreError, ClientError) as exc:
        logger.error("health_check_store_failure", error=str(exc))
        return {"backend": backend, "status": "down"}
    return {
        "backend": backend,
        "status": "up",
        "table": settings.PRODUCTS_TABLE,
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {"store": _probe_store()}
    overall_healthy = all(s["status"] == "up" for s in services.values())

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "service": SERVICE_NAME,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
