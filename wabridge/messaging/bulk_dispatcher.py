"""
Bulk message dispatch against a single messaging session.

Items are processed strictly in input order, one at a time:
resolve recipient -> wait the item's delay (not before item 0) ->
presence "available" -> send. A failing item is recorded and the loop moves
on; nothing from one item carries over into the next.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from wabridge.core.logging.context import (
    clear_recipient_context,
    set_request_context,
)
from wabridge.core.logging.logger import get_logger
from wabridge.domain.enums import EventStatus, WAPresence
from wabridge.domain.interfaces.event_interface import IEventEmitter
from wabridge.domain.interfaces.messaging_interface import IMessagingClient
from wabridge.domain.models.bulk import (
    BulkResult,
    DispatchFailure,
    DispatchSuccess,
    SendRequest,
)

SEND_MESSAGE_EVENT = "send.message"
JID_NOT_FOUND_ERROR = "JID does not exists"
SEND_FAILED_ERROR = "An error occured during message send"

Sleep = Callable[[float], Awaitable[None]]


class BulkDispatcher:
    """
    Sends an ordered batch of messages through one session.

    Assumes at most one bulk dispatch runs per session at a time; callers
    serialise concurrent batches for the same session.

    Example:
        dispatcher = BulkDispatcher(client, emitter)
        result = await dispatcher.dispatch_bulk("sales", requests)
        if result.all_failed():
            ...
    """

    def __init__(
        self,
        client: IMessagingClient,
        emitter: IEventEmitter,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            client: Messaging client used for resolution, presence and sends
            emitter: Receives one send.message event per item that reaches the send step
            sleep: Awaitable taking seconds, used for inter-item pacing
        """
        self.client = client
        self.emitter = emitter
        self._sleep = sleep
        self.logger = get_logger(__name__)

    async def dispatch_bulk(
        self, session_id: str, requests: Sequence[SendRequest]
    ) -> BulkResult:
        """Dispatch every request in order and aggregate the outcomes."""
        result = BulkResult()

        for index, request in enumerate(requests):
            set_request_context(recipient_jid=request.jid)
            try:
                await self._dispatch_one(session_id, index, request, result)
            finally:
                clear_recipient_context()

        self.logger.info(
            f"Bulk dispatch finished: {len(result.results)} sent, "
            f"{len(result.errors)} failed of {result.total}"
        )
        return result

    async def _dispatch_one(
        self,
        session_id: str,
        index: int,
        request: SendRequest,
        result: BulkResult,
    ) -> None:
        try:
            jid = await self.client.resolve_recipient(
                session_id, request.jid, request.type
            )
            if jid is None:
                self.logger.warning(f"Item {index}: recipient {request.jid} not found")
                result.errors.append(DispatchFailure(index=index, error=JID_NOT_FOUND_ERROR))
                return

            if index > 0:
                await self._sleep(request.delay / 1000)

            await self.client.update_presence(session_id, WAPresence.AVAILABLE, jid)
            sent = await self.client.send_message(
                session_id, jid, request.message, request.options
            )
        except Exception as e:
            self.logger.error(f"{SEND_FAILED_ERROR} (item {index}): {e}", exc_info=True)
            result.errors.append(DispatchFailure(index=index, error=SEND_FAILED_ERROR))
            self.emitter.emit(
                SEND_MESSAGE_EVENT,
                session_id,
                None,
                EventStatus.ERROR,
                f"{SEND_FAILED_ERROR}: {e}",
            )
            return

        result.results.append(DispatchSuccess(index=index, result=sent))
        self.emitter.emit(SEND_MESSAGE_EVENT, session_id, {"jid": jid, "result": sent})
