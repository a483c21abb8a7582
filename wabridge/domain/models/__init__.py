"""
Domain models.

- Bulk dispatch: SendRequest, DispatchOutcome, DispatchSuccess, DispatchFailure, BulkResult
- Events: GatewayEvent
- Message log: Message (table), MessageRecord, MessagePage
"""

from .bulk import (
    BulkResult,
    DispatchFailure,
    DispatchOutcome,
    DispatchSuccess,
    SendRequest,
)
from .gateway_event import GatewayEvent
from .message_log import Message, MessagePage, MessageRecord

__all__ = [
    "BulkResult",
    "DispatchFailure",
    "DispatchOutcome",
    "DispatchSuccess",
    "GatewayEvent",
    "Message",
    "MessagePage",
    "MessageRecord",
    "SendRequest",
]
