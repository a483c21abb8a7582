"""
Forwards gateway events to an HTTP webhook.
"""

import aiohttp

from wabridge.core.logging.logger import get_logger
from wabridge.domain.models.gateway_event import GatewayEvent

ALL_EVENTS = "all"


class WebhookEventForwarder:
    """
    Event listener that POSTs every allowed event to a webhook URL.

    Delivery is best effort: a failed POST is logged and dropped.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        allowed_events: list[str] | None = None,
    ):
        self.session = session
        self.url = url
        self.allowed_events = allowed_events or [ALL_EVENTS]
        self.logger = get_logger(__name__)

    def accepts(self, event: GatewayEvent) -> bool:
        return ALL_EVENTS in self.allowed_events or event.event in self.allowed_events

    async def __call__(self, event: GatewayEvent) -> None:
        if not self.accepts(event):
            return

        payload = event.model_dump(mode="json")
        try:
            async with self.session.post(self.url, json=payload) as response:
                if response.status >= 400:
                    self.logger.warning(
                        f"Webhook {self.url} answered {response.status} for {event.event}"
                    )
                    return
            self.logger.debug(f"Event {event.event} forwarded to {self.url}")
        except aiohttp.ClientError as e:
            self.logger.error(f"Failed to forward {event.event} to {self.url}: {e}")
