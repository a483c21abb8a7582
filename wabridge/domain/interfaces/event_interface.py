"""
Event emitter interface.

Send outcomes are published on a fire-and-forget side channel. Components
receive the emitter as a constructor argument, never as a global, so tests
can capture what was emitted.
"""

from abc import ABC, abstractmethod
from typing import Any

from wabridge.domain.enums import EventStatus


class IEventEmitter(ABC):
    """Fan-out of gateway events to subscribers."""

    @abstractmethod
    def emit(
        self,
        event: str,
        session_id: str,
        data: Any = None,
        status: EventStatus | str = EventStatus.SUCCESS,
        message: str | None = None,
    ) -> None:
        """Publish an event. Never raises and returns nothing.

        Args:
            event: Event name (e.g. "send.message")
            session_id: Session the event belongs to
            data: Event payload
            status: "success" or "error"
            message: Error detail for error events
        """
        pass
