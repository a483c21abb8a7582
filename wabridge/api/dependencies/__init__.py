"""
API dependencies for dependency injection.
"""

from .messaging_dependencies import (
    get_bulk_dispatcher,
    get_event_emitter,
    get_message_repository,
    get_messaging_client,
    require_session,
)

__all__ = [
    "get_bulk_dispatcher",
    "get_event_emitter",
    "get_message_repository",
    "get_messaging_client",
    "require_session",
]
