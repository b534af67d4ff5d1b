"""Uniform response envelope and exception handlers.

Every response body has the shape::

    {"success": bool, "message": str, "data": <payload or null>, "count"?: int}

Failures carry ``data: null``, or ``[]`` on endpoints whose success payload
is a list.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotelres.domain.errors import BookingError, StorageError
from hotelres.observability.correlation import get_correlation_id
from hotelres.observability.logging import get_logger

logger = get_logger(__name__)

# Endpoints whose success payload is a list
LIST_PAYLOAD_PATHS = frozenset({"/rooms", "/availability", "/reservations/lookup"})


def success(
    data: Any,
    message: str,
    *,
    status_code: int = 200,
    count: int | None = None,
    **extra_fields: Any,
) -> JSONResponse:
    """Build a success envelope.

    Args:
        data: Payload (JSON-ready).
        message: Human-readable summary.
        status_code: HTTP status (default 200).
        count: Item count for list payloads.
        **extra_fields: Additional top-level fields (e.g. echoed dates).
    """
    body: dict[str, Any] = {"success": True, "message": message, "data": data}
    if count is not None:
        body["count"] = count
    body.update(extra_fields)
    return JSONResponse(status_code=status_code, content=body)


def failure(request: Request, message: str, status_code: int) -> JSONResponse:
    """Build a failure envelope for the endpoint behind ``request``."""
    data: list | None = [] if request.url.path in LIST_PAYLOAD_PATHS else None
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": data},
    )


async def _booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    extra = {
        "correlationId": get_correlation_id(),
        "path": request.url.path,
        "error_code": exc.code,
        "status_code": exc.status_code,
    }
    if isinstance(exc, StorageError):
        logger.error("request failed: storage error", extra={"extra_fields": extra})
    else:
        logger.info("request rejected", extra={"extra_fields": extra})
    return failure(request, exc.message, exc.status_code)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    field = None
    if errors and errors[0].get("type") != "json_invalid":
        loc = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
        field = ".".join(loc) or None
    message = f"Invalid value for {field}" if field else "Invalid request body"
    logger.info(
        "request rejected: malformed body",
        extra={"extra_fields": {"path": request.url.path, "field": field}},
    )
    return failure(request, message, 400)


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and answer with the generic 500 envelope."""
    logger.error(
        "unhandled error",
        exc_info=exc,
        extra={
            "extra_fields": {
                "correlationId": get_correlation_id(),
                "path": request.url.path,
                "error_type": type(exc).__name__,
            }
        },
    )
    return failure(request, StorageError.PUBLIC_MESSAGE, 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Convert domain and request-body failures into the failure envelope.

    Unexpected exceptions are handled by the correlation middleware through
    unhandled_error_response, so the 500 still carries CORS and
    X-Correlation-ID headers.
    """
    app.add_exception_handler(BookingError, _booking_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
