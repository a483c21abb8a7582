"""
Bridge Core Plugin

Encapsulates the gateway's foundation: logging, the HTTP session used to reach
the messaging bridge, the event emitter, the core middleware stack and the
health and messages routes.
"""

from typing import TYPE_CHECKING

import aiohttp
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from wabridge.api.middleware.error_handler import (
    ErrorHandlerMiddleware,
    http_exception_handler,
    validation_exception_handler,
)
from wabridge.api.middleware.request_logging import RequestLoggingMiddleware
from wabridge.api.middleware.session_context import SessionContextMiddleware
from wabridge.api.routes.health import router as health_router
from wabridge.api.routes.messages import router as messages_router
from wabridge.messaging.bridge.bridge_client import BaileysBridgeClient

from ..config.settings import settings
from ..events.event_emitter import EventEmitter
from ..events.webhook_forwarder import WebhookEventForwarder
from ..logging.logger import get_app_logger, setup_app_logging

if TYPE_CHECKING:
    from wabridge.domain.interfaces.event_interface import IEventEmitter
    from wabridge.domain.interfaces.messaging_interface import IMessagingClient

    from ..factory.bridge_builder import BridgeBuilder


class BridgeCorePlugin:
    """
    Core gateway functionality as a plugin.

    Provides:
    - Application logging setup
    - Persistent aiohttp session for the bridge and the webhook
    - Messaging client and event emitter on ``app.state``
    - Core middleware stack (SessionContext, ErrorHandler, RequestLogging)
    - Core routes (Health, Messages)
    """

    def __init__(
        self,
        messaging_client: "IMessagingClient | None" = None,
        emitter: "IEventEmitter | None" = None,
    ):
        """
        Initialize the core plugin.

        Args:
            messaging_client: Client to use instead of the bridge client
            emitter: Event emitter to use instead of a fresh EventEmitter
        """
        self.messaging_client = messaging_client
        self.emitter = emitter

    def configure(self, builder: "BridgeBuilder") -> None:
        """Register core middleware, handlers, routes and lifespan hooks."""
        logger = get_app_logger()
        logger.debug("Configuring BridgeCorePlugin...")

        # Higher priority numbers run closer to routes (inner middleware)
        builder.add_middleware(SessionContextMiddleware, priority=90)
        builder.add_middleware(ErrorHandlerMiddleware, priority=80)
        builder.add_middleware(RequestLoggingMiddleware, priority=70)

        builder.add_exception_handler(RequestValidationError, validation_exception_handler)
        builder.add_exception_handler(StarletteHTTPException, http_exception_handler)

        builder.add_router(health_router)
        builder.add_router(messages_router)

        builder.add_startup_hook(self.startup, priority=10)
        builder.add_shutdown_hook(self.shutdown, priority=90)

        logger.debug("BridgeCorePlugin configured - middleware: 3, routes: 2, hooks: 2")

    async def startup(self, app: FastAPI) -> None:
        """
        Core startup, running first (priority 10) so later hooks can rely on
        logging, the HTTP session and the event emitter.
        """
        logger = None
        try:
            setup_app_logging()
            logger = get_app_logger()

            logger.info(f"Starting wabridge v{settings.version}")
            logger.info(f"Environment: {settings.environment}")
            logger.info(f"Log level: {settings.log_level}")

            connector = aiohttp.TCPConnector(
                limit=100, keepalive_timeout=30, enable_cleanup_closed=True
            )
            session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=settings.bridge_timeout),
            )
            app.state.http_session = session
            logger.info(
                f"Persistent HTTP session created - timeout: {settings.bridge_timeout}s"
            )

            emitter = self.emitter or EventEmitter()
            app.state.event_emitter = emitter

            if settings.has_webhook:
                emitter.subscribe(
                    WebhookEventForwarder(
                        session, settings.webhook_url, settings.webhook_allowed_events
                    )
                )
                logger.info(f"Forwarding events to webhook: {settings.webhook_url}")

            app.state.messaging_client = self.messaging_client or BaileysBridgeClient(
                session, settings.bridge_url, settings.bridge_api_key
            )

            base_url = f"http://localhost:{settings.port}"
            logger.info("=== AVAILABLE ENDPOINTS ===")
            logger.info(f"Health Check: {base_url}/health")
            logger.info(f"Messages API: {base_url}/sessions/{{session_id}}/messages")
            logger.info(
                f"API Documentation: {base_url}/docs"
                if settings.is_development
                else "API docs disabled in production"
            )
            logger.info("Core startup completed successfully")

        except Exception as e:
            if logger:
                logger.error(f"Error during core startup: {e}", exc_info=True)
            raise

    async def shutdown(self, app: FastAPI) -> None:
        """Core shutdown (priority 90): settle pending events, then close the HTTP session."""
        logger = get_app_logger()
        logger.info("Starting core shutdown...")

        try:
            emitter = getattr(app.state, "event_emitter", None)
            if isinstance(emitter, EventEmitter):
                await emitter.drain()

            if hasattr(app.state, "http_session"):
                await app.state.http_session.close()
                logger.info("Persistent HTTP session closed cleanly")

            logger.info("Core shutdown completed")

        except Exception as e:
            logger.error(f"Error during core shutdown: {e}", exc_info=True)
