"""
Maps ticketing errors and malformed requests to {"error": message} responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ticketing.core.exceptions import TicketingError
from ticketing.core.logging import get_logger

logger = get_logger(__name__)

INVALID_REQUEST = "Invalid request payload."
INTERNAL_ERROR = "Internal server error."


async def ticketing_error_handler(request: Request, exc: TicketingError) -> JSONResponse:
    logger.warning("ticketing_error", kind=exc.kind, error=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("request_validation_failed", errors=exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": INVALID_REQUEST})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR},
    )


EXCEPTION_HANDLERS = {
    TicketingError: ticketing_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
