"""
Session context middleware.

Extracts the session ID from ``/sessions/{session_id}/...`` paths and sets
it in the logging context for the rest of the request.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wabridge.core.logging.context import set_request_context
from wabridge.core.logging.logger import get_logger

logger = get_logger(__name__)

SESSION_PATH_PREFIX = "sessions"


class SessionContextMiddleware(BaseHTTPMiddleware):
    """
    URL Pattern: /sessions/{session_id}/...
    Purpose: Put session_id in the context system.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        session_id = self.extract_session_id(request.url.path)
        if session_id:
            set_request_context(session_id=session_id)
            logger.debug(f"Session context set: {session_id}")

        return await call_next(request)

    @staticmethod
    def extract_session_id(path: str) -> str | None:
        parts = path.strip("/").split("/")
        if len(parts) >= 2 and parts[0] == SESSION_PATH_PREFIX and parts[1]:
            return parts[1]
        return None
