"""
Domain interfaces for the collaborators the gateway talks to.
"""

from .event_interface import IEventEmitter
from .messaging_interface import IMessagingClient, MessagingClientError

__all__ = ["IEventEmitter", "IMessagingClient", "MessagingClientError"]
