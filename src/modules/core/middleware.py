"""Request-scoped logging context.

There is no authentication: the web client picks the "current user" and
may announce it through ``X-User-ID``.  That value, together with the
correlation ID, is bound into structlog's contextvars so every log line
emitted while serving the request carries both.
"""

import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Extract or generate a correlation ID and bind the request log context.

    The ID comes from ``X-Request-ID`` when the client sends one, otherwise
    a fresh UUID4 is generated.  It is echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        context = {"correlation_id": cid}
        selected_user = request.headers.get("X-User-ID")
        if selected_user:
            context["selected_user_id"] = selected_user
        structlog.contextvars.bind_contextvars(**context)

        log = logger.bind(method=request.method, path=request.get_full_path())
        log.info("request_started")

        response = self.get_response(request)

        log.info("request_finished", status_code=response.status_code)

        response[REQUEST_ID_HEADER] = cid
        return response
