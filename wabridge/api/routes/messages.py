"""
Messages API endpoints.

Provides REST API endpoints that forward into the session's messaging client:
- GET    /sessions/{session_id}/messages: Page through the message log
- POST   /sessions/{session_id}/messages/send: Send any message content
- POST   /sessions/{session_id}/messages/send/bulk: Send a paced batch
- POST   /sessions/{session_id}/messages/send/buttons: Quick reply buttons
- POST   /sessions/{session_id}/messages/send/list: Sectioned list
- POST   /sessions/{session_id}/messages/send/template-buttons: URL/call/reply buttons
- POST   /sessions/{session_id}/messages/send/link: Text with link preview
- POST   /sessions/{session_id}/messages/download: Download received media
- DELETE /sessions/{session_id}/messages/delete: Delete for everyone
- DELETE /sessions/{session_id}/messages/delete/onlyme: Delete on this device
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse, Response

from wabridge.api.dependencies.messaging_dependencies import (
    get_bulk_dispatcher,
    get_event_emitter,
    get_message_repository,
    get_messaging_client,
    require_session,
)
from wabridge.api.utils.error_helpers import (
    DELETE_FAILED,
    DOWNLOAD_FAILED,
    JID_NOT_FOUND,
    LIST_FAILED,
    SEND_BUTTONS_FAILED,
    SEND_FAILED,
    SEND_LINK_FAILED,
    SEND_LIST_FAILED,
    SEND_TEMPLATE_BUTTONS_FAILED,
    bulk_status_code,
    error_response,
)
from wabridge.core.config.settings import settings
from wabridge.core.logging.context import set_request_context
from wabridge.core.logging.logger import get_logger
from wabridge.database.message_repository import MessageRepository
from wabridge.domain.enums import EventStatus, WAPresence
from wabridge.domain.interfaces.event_interface import IEventEmitter
from wabridge.domain.interfaces.messaging_interface import IMessagingClient
from wabridge.domain.models.bulk import SendRequest
from wabridge.domain.models.message_log import MessagePage
from wabridge.messaging.bulk_dispatcher import SEND_MESSAGE_EVENT, BulkDispatcher
from wabridge.messaging.message_builders import (
    build_button_message,
    build_clear_for_me_modification,
    build_delete_message,
    build_link_message,
    build_list_message,
    build_template_buttons_message,
)
from wabridge.messaging.models.basic_models import (
    DeleteForMeRequest,
    DeleteMessageRequest,
    MediaMessageRequest,
    RecipientMessage,
    SendMessageRequest,
)
from wabridge.messaging.models.interactive_models import (
    ButtonMessageRequest,
    LinkMessageRequest,
    ListMessageRequest,
    TemplateButtonsMessageRequest,
)

BUTTONS_WARNING = "Legacy buttons may not render on recent WhatsApp versions"
LIST_WARNING = "List messages may not render on recent WhatsApp versions"

router = APIRouter(
    prefix="/sessions/{session_id}/messages",
    tags=["Messages"],
    responses={
        400: {"description": "Bad Request - Invalid body or unknown recipient"},
        404: {"description": "Not Found - Session not found"},
        500: {"description": "Internal Server Error"},
    },
)


class RecipientNotFound(Exception):
    """The messaging client does not know the requested recipient."""


async def _resolve(
    client: IMessagingClient, session_id: str, request: RecipientMessage
) -> str:
    set_request_context(recipient_jid=request.jid)
    jid = await client.resolve_recipient(session_id, request.jid, request.type)
    if jid is None:
        raise RecipientNotFound(request.jid)
    return jid


async def _present_and_send(
    client: IMessagingClient,
    emitter: IEventEmitter,
    session_id: str,
    jid: str,
    content: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> Any:
    await client.update_presence(session_id, WAPresence.AVAILABLE, jid)
    result = await client.send_message(session_id, jid, content, options)
    emitter.emit(SEND_MESSAGE_EVENT, session_id, {"jid": jid, "result": result})
    return result


def _send_failure(
    emitter: IEventEmitter, session_id: str, message: str, error: Exception
) -> JSONResponse:
    get_logger(__name__).error(f"{message}: {error}", exc_info=True)
    emitter.emit(
        SEND_MESSAGE_EVENT, session_id, None, EventStatus.ERROR, f"{message}: {error}"
    )
    return error_response(500, message)


@router.get(
    "",
    response_model=MessagePage,
    summary="List Messages",
    description="Page through the message log of a session using a pk cursor",
)
async def list_messages(
    session_id: str,
    cursor: int | None = Query(None, description="pkId of the last message already seen"),
    limit: int = Query(settings.message_page_size, ge=1, description="Page size"),
    repository: MessageRepository = Depends(get_message_repository),
):
    """List logged messages of a session.

    Returns:
        ``{"data": [...], "cursor": <pkId> | null}``; the cursor is set only
        when a full page was returned
    """
    try:
        return await repository.list_page(session_id, cursor=cursor, limit=limit)
    except Exception as e:
        get_logger(__name__).error(f"{LIST_FAILED}: {e}", exc_info=True)
        return error_response(500, LIST_FAILED)


@router.post(
    "/send",
    summary="Send Message",
    description="Send message content as-is to a number or group",
)
async def send_message(
    request: SendMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
):
    """Send a message and return the client's message info.

    Raises:
        400: If the recipient does not exist
        500: If presence update or send fails
    """
    await require_session(session_id, client)

    try:
        jid = await _resolve(client, session_id, request)
        return await _present_and_send(
            client, emitter, session_id, jid, request.message, request.options
        )
    except RecipientNotFound:
        return error_response(400, JID_NOT_FOUND)
    except Exception as e:
        return _send_failure(emitter, session_id, SEND_FAILED, e)


@router.post(
    "/send/bulk",
    summary="Send Bulk Messages",
    description="Send an ordered batch with per-item delay; answers 500 only if every item failed",
)
async def send_bulk(
    session_id: str,
    requests: list[SendRequest] = Body(...),
    client: IMessagingClient = Depends(get_messaging_client),
    dispatcher: BulkDispatcher = Depends(get_bulk_dispatcher),
) -> JSONResponse:
    """Dispatch a batch of messages.

    Returns:
        ``{"results": [{"index", "result"}], "errors": [{"index", "error"}]}``
    """
    await require_session(session_id, client)

    logger = get_logger(__name__)
    logger.info(f"Bulk send of {len(requests)} messages")

    result = await dispatcher.dispatch_bulk(session_id, requests)
    return JSONResponse(
        status_code=bulk_status_code(result), content=result.model_dump(mode="json")
    )


@router.post(
    "/send/buttons",
    summary="Send Buttons Message",
    description="Send a text with up to 3 quick reply buttons",
)
async def send_buttons(
    request: ButtonMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
):
    await require_session(session_id, client)

    try:
        jid = await _resolve(client, session_id, request)
        result = await _present_and_send(
            client, emitter, session_id, jid, build_button_message(request)
        )
    except RecipientNotFound:
        return error_response(400, JID_NOT_FOUND)
    except Exception as e:
        return _send_failure(emitter, session_id, SEND_BUTTONS_FAILED, e)

    return {"result": result, "warning": BUTTONS_WARNING}


@router.post(
    "/send/list",
    summary="Send List Message",
    description="Send a sectioned list (up to 10 rows per section)",
)
async def send_list(
    request: ListMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
):
    await require_session(session_id, client)

    try:
        jid = await _resolve(client, session_id, request)
        result = await _present_and_send(
            client, emitter, session_id, jid, build_list_message(request)
        )
    except RecipientNotFound:
        return error_response(400, JID_NOT_FOUND)
    except Exception as e:
        return _send_failure(emitter, session_id, SEND_LIST_FAILED, e)

    return {"result": result, "warning": LIST_WARNING}


@router.post(
    "/send/template-buttons",
    summary="Send Template Buttons Message",
    description="Send a text with up to 3 url, call or quick reply buttons",
)
async def send_template_buttons(
    request: TemplateButtonsMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
):
    await require_session(session_id, client)

    try:
        jid = await _resolve(client, session_id, request)
        result = await _present_and_send(
            client, emitter, session_id, jid, build_template_buttons_message(request)
        )
    except RecipientNotFound:
        return error_response(400, JID_NOT_FOUND)
    except Exception as e:
        return _send_failure(emitter, session_id, SEND_TEMPLATE_BUTTONS_FAILED, e)

    return {"result": result}


@router.post(
    "/send/link",
    summary="Send Link Message",
    description="Send a text followed by a URL with a link preview",
)
async def send_link(
    request: LinkMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
    emitter: IEventEmitter = Depends(get_event_emitter),
):
    await require_session(session_id, client)

    try:
        jid = await _resolve(client, session_id, request)
        result = await _present_and_send(
            client, emitter, session_id, jid, build_link_message(request)
        )
    except RecipientNotFound:
        return error_response(400, JID_NOT_FOUND)
    except Exception as e:
        return _send_failure(emitter, session_id, SEND_LINK_FAILED, e)

    return {"result": result}


@router.post(
    "/download",
    summary="Download Media",
    description="Download the media of a received message; answers with the raw bytes",
)
async def download_media(
    request: MediaMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
):
    """Download media attached to a message.

    The first key of ``message`` names the media content whose ``mimetype``
    becomes the response content type.
    """
    await require_session(session_id, client)

    try:
        media_type = next(iter(request.message))
        content = request.message[media_type]
        mimetype = content["mimetype"]
        data = await client.download_media(
            session_id, request.model_dump(exclude_unset=True)
        )
    except Exception as e:
        get_logger(__name__).error(f"{DOWNLOAD_FAILED}: {e}", exc_info=True)
        return error_response(500, DOWNLOAD_FAILED)

    return Response(content=data, media_type=mimetype)


@router.delete(
    "/delete",
    summary="Delete Message",
    description="Delete a message for everyone in the chat",
)
async def delete_message(
    request: DeleteMessageRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
):
    await require_session(session_id, client)

    try:
        if not await client.jid_exists(session_id, request.jid, request.type):
            return error_response(400, JID_NOT_FOUND)
        return await client.send_message(
            session_id, request.jid, build_delete_message(request.message)
        )
    except Exception as e:
        get_logger(__name__).error(f"{DELETE_FAILED}: {e}", exc_info=True)
        return error_response(500, DELETE_FAILED)


@router.delete(
    "/delete/onlyme",
    summary="Delete Message For Me",
    description="Clear a message on this device only",
)
async def delete_message_for_me(
    request: DeleteForMeRequest,
    session_id: str,
    client: IMessagingClient = Depends(get_messaging_client),
):
    await require_session(session_id, client)

    try:
        if not await client.jid_exists(session_id, request.jid, request.type):
            return error_response(400, JID_NOT_FOUND)
        return await client.chat_modify(
            session_id, build_clear_for_me_modification(request), request.jid
        )
    except Exception as e:
        get_logger(__name__).error(f"{DELETE_FAILED}: {e}", exc_info=True)
        return error_response(500, DELETE_FAILED)
