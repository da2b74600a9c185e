import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Tag every log line of a request with a correlation id.

    The id comes from the ``X-Request-ID`` header or is a fresh UUID4. It
    is bound into structlog's contextvars for the duration of the request
    and echoed back in the response header. One ``http_request`` line is
    logged per request with its status and duration.

    Contextvars are cleared on the way out as well as on the way in, so a
    reused worker thread never carries an id into unrelated log lines.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)
        start = time.monotonic()
        try:
            response = self.get_response(request)
            logger.info(
                "http_request",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response[REQUEST_ID_HEADER] = cid
        return response
