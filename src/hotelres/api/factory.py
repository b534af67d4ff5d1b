"""FastAPI application factory."""

import os

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from hotelres.observability.correlation import (
    CORRELATION_ID_HEADER,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)

from .envelope import register_exception_handlers, unhandled_error_response
from .routers import public
from .routes import availability, reservations, rooms


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Create the booking API.

    The static frontend is served from another origin, so CORS is open to
    CORS_ALLOW_ORIGINS (default "*").

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Hotel Reservations",
        docs_url=None,
        redoc_url=None,
    )

    # Correlation ID middleware; also the last stop for unexpected errors
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        token = set_correlation_id(cid)
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = unhandled_error_response(request, exc)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    # Added last so it wraps the correlation middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", CORRELATION_ID_HEADER],
        expose_headers=[CORRELATION_ID_HEADER],
    )

    register_exception_handlers(app)

    app.include_router(public.router)
    app.include_router(rooms.router)
    app.include_router(availability.router)
    app.include_router(reservations.router)

    return app
