"""
Exception handlers rendering every error with one body shape:
{"statusCode", "timestamp", "path", "message"}.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse

from concert_booking.core.exceptions import ReservationServiceError
from concert_booking.core.logging import get_logger

logger = get_logger(__name__)


def error_body(request: Request, status_code: int, message) -> dict:
    return {
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "message": message,
    }


async def domain_error_handler(request: Request, exc: ReservationServiceError) -> JSONResponse:
    logger.info("domain_error", error=type(exc).__name__, message=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, exc.message),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "message" in detail:
        detail = detail["message"]
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
    )


EXCEPTION_HANDLERS = {
    ReservationServiceError: domain_error_handler,
    HTTPException: http_exception_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
