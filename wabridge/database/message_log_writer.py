"""
Event listener that writes sent messages to the message log.
"""

from wabridge.core.logging.logger import get_logger
from wabridge.domain.models.gateway_event import GatewayEvent

from .message_repository import MessageRepository

LOGGED_EVENTS = frozenset({"send.message"})


class MessageLogWriter:
    """Persists the message info carried by successful send events."""

    def __init__(self, repository: MessageRepository):
        self.repository = repository
        self.logger = get_logger(__name__)

    async def __call__(self, event: GatewayEvent) -> None:
        if event.is_error or event.event not in LOGGED_EVENTS:
            return

        info = (event.data or {}).get("result")
        if not isinstance(info, dict):
            return

        await self.repository.record(event.session_id, info)
