"""
Gateway event fan-out.

- EventEmitter: publishes GatewayEvent objects to subscribed listeners
- WebhookEventForwarder: listener that POSTs events to a webhook URL
"""

from .event_emitter import EventEmitter, EventListener
from .webhook_forwarder import WebhookEventForwarder

__all__ = ["EventEmitter", "EventListener", "WebhookEventForwarder"]
