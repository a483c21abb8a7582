"""
Request and response logging middleware with session context.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wabridge.core.config.settings import settings
from wabridge.core.logging.logger import get_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request and its response with timing.

    Headers listed in ``sensitive_headers`` and request bodies are never logged.
    """

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.sensitive_headers = {
            "authorization",
            "x-api-key",
            "cookie",
            "set-cookie",
            "x-access-token",
            "x-auth-token",
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        logger = get_logger(__name__)
        skip = self._should_skip_logging(request.url.path)

        if self.log_requests and not skip:
            self._log_request(request, logger)

        response = await call_next(request)
        process_time = time.time() - start_time

        if settings.is_development:
            response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))

        if self.log_responses and not skip:
            self._log_response(request, response, process_time, logger)

        return response

    def _should_skip_logging(self, path: str) -> bool:
        skip_paths = ["/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"]
        return any(path.startswith(skip_path) for skip_path in skip_paths)

    def _log_request(self, request: Request, logger) -> None:
        safe_headers = {
            k: v
            for k, v in request.headers.items()
            if k.lower() not in self.sensitive_headers
        }
        log_data = {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "headers": safe_headers,
            "client_host": request.client.host if request.client else "unknown",
            "content_length": request.headers.get("content-length"),
        }
        logger.info(
            f"Incoming {request.method} {request.url.path}", extra={"request": log_data}
        )

    def _log_response(
        self, request: Request, response: Response, process_time: float, logger
    ) -> None:
        status_code = response.status_code
        if status_code >= 500:
            log_level = "error"
        elif status_code >= 400:
            log_level = "warning"
        else:
            log_level = "info"

        process_time_ms = round(process_time * 1000, 2)
        getattr(logger, log_level)(
            f"Response {status_code} for {request.method} {request.url.path} "
            f"({process_time_ms}ms)",
            extra={"response": {"status_code": status_code, "process_time_ms": process_time_ms}},
        )
