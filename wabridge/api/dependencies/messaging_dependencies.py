"""
Messaging dependency injection.

Everything here reads the collaborators the lifespan placed on ``app.state``:
the messaging client, the event emitter and (optionally) the message log.
"""

from fastapi import Depends, HTTPException, Request

from wabridge.api.utils.error_helpers import MESSAGE_LOG_UNAVAILABLE, SESSION_NOT_FOUND
from wabridge.core.logging.context import set_request_context
from wabridge.database.message_repository import MessageRepository
from wabridge.domain.interfaces.event_interface import IEventEmitter
from wabridge.domain.interfaces.messaging_interface import IMessagingClient
from wabridge.messaging.bulk_dispatcher import BulkDispatcher


async def get_messaging_client(request: Request) -> IMessagingClient:
    """Get the messaging client created at startup."""
    return request.app.state.messaging_client


async def get_event_emitter(request: Request) -> IEventEmitter:
    """Get the event emitter created at startup."""
    return request.app.state.event_emitter


async def get_bulk_dispatcher(
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
) -> BulkDispatcher:
    """Get a bulk dispatcher bound to the app's client and emitter."""
    return BulkDispatcher(client, emitter)


async def get_message_repository(request: Request) -> MessageRepository:
    """Get the message log repository.

    Raises:
        HTTPException 503: If no database is configured
    """
    repository = getattr(request.app.state, "message_repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail=MESSAGE_LOG_UNAVAILABLE)
    return repository


async def require_session(session_id: str, client: IMessagingClient) -> str:
    """Ensure the path's session is active.

    Handlers call this after FastAPI has validated the request body, so an
    invalid body answers 400 even for an unknown session.

    Raises:
        HTTPException 404: If the messaging client has no such session
    """
    if not await client.has_session(session_id):
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
    set_request_context(session_id=session_id)
    return session_id
