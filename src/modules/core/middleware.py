import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Bind a correlation ID to every log line emitted while serving a request.

    The ID comes from the ``X-Request-ID`` header when the caller (usually
    the order or payment service) supplies one, otherwise a UUID4 is
    generated.  It is echoed back on the response so both sides can
    correlate their logs.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)
        log = logger.bind(method=request.method, path=request.path)

        log.info("http.request_started")
        response = self.get_response(request)
        log.info("http.request_finished", status_code=response.status_code)

        response[REQUEST_ID_HEADER] = cid
        return response
