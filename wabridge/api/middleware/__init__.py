"""
HTTP middleware and exception handlers.
"""

from .error_handler import (
    ErrorHandlerMiddleware,
    ValidationErrorHandler,
    http_exception_handler,
    validation_exception_handler,
)
from .request_logging import RequestLoggingMiddleware
from .session_context import SessionContextMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggingMiddleware",
    "SessionContextMiddleware",
    "ValidationErrorHandler",
    "http_exception_handler",
    "validation_exception_handler",
]
