"""
Application factory for the WhatsApp REST gateway.
"""

from fastapi import FastAPI

from wabridge.domain.interfaces.event_interface import IEventEmitter
from wabridge.domain.interfaces.messaging_interface import IMessagingClient

from .config.settings import settings
from .factory.bridge_builder import BridgeBuilder
from .plugins.bridge_core_plugin import BridgeCorePlugin
from .plugins.message_log_plugin import MessageLogPlugin


def create_app(
    messaging_client: IMessagingClient | None = None,
    database_url: str | None = settings.database_url,
    emitter: IEventEmitter | None = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        messaging_client: Client to forward into; defaults to the bridge sidecar client
        database_url: Message log database; the log is disabled when None
        emitter: Event emitter; defaults to a fresh EventEmitter

    Example:
        uvicorn wabridge.core.app:create_app --factory
    """
    builder = BridgeBuilder()
    builder.add_plugin(BridgeCorePlugin(messaging_client=messaging_client, emitter=emitter))
    if database_url:
        builder.add_plugin(MessageLogPlugin(database_url))

    builder.configure(
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    return builder.build()
