"""
Enums shared by the domain, the messaging bridge and the HTTP API.
"""

from enum import Enum


class RecipientKind(str, Enum):
    """How a recipient identifier is resolved by the messaging client.

    The wire values are the ones accepted by the REST API (``type`` field).
    """

    INDIVIDUAL = "number"
    GROUP = "group"


class WAPresence(str, Enum):
    """Presence states understood by the messaging client."""

    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"
    COMPOSING = "composing"
    RECORDING = "recording"
    PAUSED = "paused"


class EventStatus(str, Enum):
    """Outcome tag attached to every emitted gateway event."""

    SUCCESS = "success"
    ERROR = "error"
