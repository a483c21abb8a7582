"""
wabridge - REST gateway for WhatsApp messaging sessions.

Exposes session messaging (single, bulk, interactive, media and delete) over
HTTP and forwards into a WhatsApp client library running as a bridge sidecar.
"""

from .core.app import create_app
from .core.config.settings import settings
from .core.events import EventEmitter, WebhookEventForwarder
from .core.factory import BridgeBuilder, BridgePlugin
from .core.plugins import BridgeCorePlugin, MessageLogPlugin
from .domain.interfaces import IEventEmitter, IMessagingClient, MessagingClientError
from .domain.models import BulkResult, DispatchFailure, DispatchSuccess, SendRequest
from .messaging import BulkDispatcher

__version__ = settings.version

__all__ = [
    "BridgeBuilder",
    "BridgeCorePlugin",
    "BridgePlugin",
    "BulkDispatcher",
    "BulkResult",
    "DispatchFailure",
    "DispatchSuccess",
    "EventEmitter",
    "IEventEmitter",
    "IMessagingClient",
    "MessageLogPlugin",
    "MessagingClientError",
    "SendRequest",
    "WebhookEventForwarder",
    "create_app",
]
