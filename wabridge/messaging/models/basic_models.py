"""
Basic message models for the messages API.

Pydantic schemas for plain sends and deletes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wabridge.domain.enums import RecipientKind


class RecipientMessage(BaseModel):
    """Fields shared by every request addressed to one recipient."""

    jid: str = Field(..., min_length=1, description="Recipient number or jid")
    type: RecipientKind = Field(
        RecipientKind.INDIVIDUAL, description="Resolve as individual (number) or group"
    )


class SendMessageRequest(RecipientMessage):
    """Schema for POST /send: message content is forwarded as-is."""

    message: dict[str, Any] = Field(..., min_length=1, description="Message content")
    options: dict[str, Any] | None = Field(None, description="Client send options")


class DeleteMessageRequest(RecipientMessage):
    """Schema for DELETE /delete: deletes a message for everyone.

    Example:
        {
            "jid": "120363xxx8@g.us",
            "type": "group",
            "message": {"remoteJid": "120363xxx8@g.us", "fromMe": false, "id": "3EB0829036xxxxx"}
        }
    """

    message: dict[str, Any] = Field(..., min_length=1, description="Key of the message to delete")


class DeleteForMeKey(BaseModel):
    """Identifies a message to clear locally."""

    id: str = Field(..., min_length=1)
    fromMe: bool = Field(...)
    timestamp: str = Field(..., description="Message timestamp in seconds")

    @field_validator("timestamp", mode="before")
    @classmethod
    def validate_timestamp(cls, v):
        if isinstance(v, bool):
            raise ValueError("timestamp must be numeric")
        if isinstance(v, int):
            return str(v)
        if not isinstance(v, str) or not v.strip().isdigit():
            raise ValueError("timestamp must be numeric")
        return v.strip()


class DeleteForMeRequest(RecipientMessage):
    """Schema for DELETE /delete/onlyme: clears a message on this device only.

    Example:
        {
            "jid": "120363xxx8@g.us",
            "type": "group",
            "message": {"id": "ATWYHDNNWU81732J", "fromMe": false, "timestamp": "1654823909"}
        }
    """

    message: DeleteForMeKey


class MediaMessageRequest(BaseModel):
    """Schema for POST /download: a received message as delivered by the client.

    Only ``message`` is required; its first key names the media content, e.g.
    ``{"key": {...}, "message": {"imageMessage": {"mimetype": "image/jpeg", ...}}}``.
    """

    model_config = ConfigDict(extra="allow")

    key: dict[str, Any] | None = None
    message: dict[str, Any] = Field(..., min_length=1, description="Message content")
