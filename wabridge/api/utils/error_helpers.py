"""
Error handling utilities for the messages API.

Centralizes the error body shape and the status mapping shared by route handlers.
"""

from fastapi.responses import JSONResponse

from wabridge.domain.models.bulk import BulkResult
from wabridge.messaging.bulk_dispatcher import JID_NOT_FOUND_ERROR, SEND_FAILED_ERROR

# Error messages returned to API callers
JID_NOT_FOUND = JID_NOT_FOUND_ERROR
SESSION_NOT_FOUND = "Session not found"
MESSAGE_LOG_UNAVAILABLE = "Message log is not configured"
LIST_FAILED = "An error occured during message list"
SEND_FAILED = SEND_FAILED_ERROR
SEND_BUTTONS_FAILED = "An error occured during message send with buttons"
SEND_LIST_FAILED = "An error occured during message send with list"
SEND_TEMPLATE_BUTTONS_FAILED = "An error occured during message send with template buttons"
SEND_LINK_FAILED = "An error occured during message send with link"
DOWNLOAD_FAILED = "An error occured during message media download"
DELETE_FAILED = "An error occured during message delete"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{"error": message}`` body used by every route."""
    return JSONResponse(status_code=status_code, content={"error": message})


def bulk_status_code(result: BulkResult) -> int:
    """500 only when a non-empty batch failed on every item, 200 otherwise."""
    return 500 if result.all_failed() else 200
