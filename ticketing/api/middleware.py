"""
Request middleware: correlates every log line of a ticket request and
reports which operation served it.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from ticketing.core.logging import get_logger

logger = get_logger(__name__)


def _operation_name(request: Request) -> str:
    # Set by the router once the request has been matched
    route = request.scope.get("route")
    return getattr(route, "name", None) or "unmatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds a short request id plus method and path into structlog
    contextvars, so reservation logs emitted by the service carry them.
    Logs `ticket_request` with the endpoint that handled the call and
    echoes id and duration as X-Request-ID / X-Response-Time.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = uuid.uuid4().hex[:8]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "ticket_request_failed",
                operation=_operation_name(request),
                error=str(e),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "ticket_request",
            operation=_operation_name(request),
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
