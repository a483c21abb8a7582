"""
Gateway event emitter.

Follows the Observer pattern: components emit events, listeners subscribe.
Emission is fire-and-forget; listener failures are logged and never reach
the code that emitted the event.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from wabridge.core.logging.logger import get_logger
from wabridge.domain.enums import EventStatus
from wabridge.domain.interfaces.event_interface import IEventEmitter
from wabridge.domain.models.gateway_event import GatewayEvent

EventListener = Callable[[GatewayEvent], Awaitable[None] | None]


class EventEmitter(IEventEmitter):
    """
    Fans gateway events out to subscribed listeners.

    Sync listeners run inline. Async listeners run as background tasks,
    which are tracked so ``drain()`` can wait for them on shutdown.

    Example:
        emitter = EventEmitter()
        emitter.subscribe(WebhookEventForwarder(http_session, url))
        emitter.emit("send.message", "sales", {"jid": jid, "result": result})
    """

    def __init__(self):
        self._listeners: list[EventListener] = []
        self._pending: set[asyncio.Task] = set()
        self.logger = get_logger(__name__)

    @property
    def listeners(self) -> list[EventListener]:
        return list(self._listeners)

    def subscribe(self, listener: EventListener) -> EventListener:
        """Register a listener. Returns it so this can be used as a decorator."""
        self._listeners.append(listener)
        self.logger.debug(f"Event listener subscribed: {_listener_name(listener)}")
        return listener

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(
        self,
        event: str,
        session_id: str,
        data: Any = None,
        status: EventStatus | str = EventStatus.SUCCESS,
        message: str | None = None,
    ) -> None:
        gateway_event = GatewayEvent(
            event=event,
            session_id=session_id,
            data=data,
            status=EventStatus(status),
            message=message,
        )
        self.logger.debug(
            f"Emitting {event} ({gateway_event.status.value}) "
            f"to {len(self._listeners)} listeners"
        )

        for listener in list(self._listeners):
            self._notify(listener, gateway_event)

    def _notify(self, listener: EventListener, event: GatewayEvent) -> None:
        try:
            outcome = listener(event)
        except Exception as e:
            self.logger.error(
                f"Event listener {_listener_name(listener)} failed: {e}", exc_info=True
            )
            return

        if not inspect.isawaitable(outcome):
            return

        guarded = self._guard(listener, outcome)
        try:
            task = asyncio.get_running_loop().create_task(guarded)
        except RuntimeError:
            guarded.close()
            if inspect.iscoroutine(outcome):
                outcome.close()
            self.logger.warning(
                f"No running event loop, dropped {event.event} for "
                f"{_listener_name(listener)}"
            )
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _guard(self, listener: EventListener, outcome: Awaitable[None]) -> None:
        try:
            await outcome
        except Exception as e:
            self.logger.error(
                f"Event listener {_listener_name(listener)} failed: {e}", exc_info=True
            )

    async def drain(self) -> None:
        """Wait for every listener task scheduled so far."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def _listener_name(listener: EventListener) -> str:
    return getattr(listener, "__name__", listener.__class__.__name__)
