"""
Gateway event model for outgoing message tracking.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from wabridge.domain.enums import EventStatus


class GatewayEvent(BaseModel):
    """
    Event published after the gateway acts on a messaging session.

    Example:
        A successful POST /sessions/sales/messages/send emits:
        - event: "send.message"
        - session_id: "sales"
        - data: {"jid": "5215512345678@s.whatsapp.net", "result": {...}}
        - status: "success"
    """

    event: str = Field(..., description="Event name, e.g. send.message")
    session_id: str = Field(..., description="Session the event belongs to")
    data: Any = Field(default=None, description="Event payload")
    status: EventStatus = Field(default=EventStatus.SUCCESS)
    message: str | None = Field(
        default=None, description="Error detail for error events"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"extra": "forbid"}

    @property
    def is_error(self) -> bool:
        return self.status == EventStatus.ERROR
