"""
Global error handling with session-aware logging.

Provides structured error responses for unhandled exceptions, HTTP
exceptions and request validation failures.
"""

import time
import traceback
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wabridge.core.config.settings import settings
from wabridge.core.logging.logger import get_logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Catches unhandled exceptions and returns a 500 JSON body.

    Internal details are only exposed in development.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(
        self, request: Request, exc: Exception
    ) -> JSONResponse:
        logger = get_logger(__name__)
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        error_response: dict[str, Any] = {
            "error": "Internal server error",
            "type": "internal_error",
            "timestamp": time.time(),
        }
        if settings.is_development:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=500, content=error_response)


class ValidationErrorHandler:
    """
    Custom handler for Pydantic validation errors.

    Provides more user-friendly validation error messages.
    """

    @staticmethod
    def format_validation_error(exc: RequestValidationError) -> dict[str, Any]:
        errors = []

        for error in exc.errors():
            errors.append(
                {
                    "field": " -> ".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        return {
            "detail": "Validation failed",
            "type": "validation_error",
            "errors": errors,
        }


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer invalid request bodies and queries with 400."""
    get_logger(__name__).warning(
        f"Validation failed for {request.method} {request.url.path}: "
        f"{len(exc.errors())} errors"
    )
    return JSONResponse(
        status_code=400, content=ValidationErrorHandler.format_validation_error(exc)
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP exceptions as ``{"error": detail}``."""
    get_logger(__name__).warning(
        f"HTTP {exc.status_code} - {request.method} {request.url.path} - "
        f"Detail: {exc.detail}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )
