"""
Request models for the messages API.
"""

from .basic_models import (
    DeleteForMeKey,
    DeleteForMeRequest,
    DeleteMessageRequest,
    MediaMessageRequest,
    RecipientMessage,
    SendMessageRequest,
)
from .interactive_models import (
    ButtonMessageRequest,
    LinkMessageRequest,
    ListMessageRequest,
    ListRow,
    ListSection,
    ReplyButton,
    TemplateButton,
    TemplateButtonsMessageRequest,
    TemplateButtonType,
)

__all__ = [
    "ButtonMessageRequest",
    "DeleteForMeKey",
    "DeleteForMeRequest",
    "DeleteMessageRequest",
    "LinkMessageRequest",
    "MediaMessageRequest",
    "ListMessageRequest",
    "ListRow",
    "ListSection",
    "RecipientMessage",
    "ReplyButton",
    "SendMessageRequest",
    "TemplateButton",
    "TemplateButtonType",
    "TemplateButtonsMessageRequest",
]
