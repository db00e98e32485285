"""
Global error handling middleware for the FastAPI application.

Catches VoiceScribeError subclasses, Pydantic validation errors, and
unhandled exceptions, converting them into a consistent JSON envelope.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.exceptions import VoiceScribeError

logger = logging.getLogger(__name__)


def _envelope(error: str, code: str, timestamp: str | None = None) -> dict:
    return {
        "error": error,
        "code": code,
        "timestamp": timestamp or datetime.now(UTC).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers four handlers in priority order:
    1. ``VoiceScribeError``: maps domain errors to structured JSON responses.
    2. ``HTTPException``: router-level 404/405 in the same envelope.
    3. ``RequestValidationError``: Pydantic validation failures (422).
    4. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(VoiceScribeError)
    async def voicescribe_error_handler(_request: Request, exc: VoiceScribeError) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(exc.detail, exc.code, exc.timestamp),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(str(exc.detail), "HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors (malformed body/params)."""
        return JSONResponse(
            status_code=422,
            content=_envelope(str(exc), "VALIDATION_ERROR"),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler. Stack traces never reach clients."""
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content=_envelope("Internal server error", "INTERNAL_ERROR"),
        )
