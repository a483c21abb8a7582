"""
Message Log Plugin

Connects the optional message log database: creates the engine and schema,
exposes a MessageRepository on ``app.state`` and subscribes a MessageLogWriter
to the gateway's event emitter so sent messages get recorded.
"""

from typing import TYPE_CHECKING, Any

from wabridge.database.adapters import adapter_for_url
from wabridge.database.message_log_writer import MessageLogWriter
from wabridge.database.message_repository import MessageRepository
from wabridge.domain.models.message_log import Message

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

    from wabridge.database.adapter import DatabaseAdapter

    from ..factory.bridge_builder import BridgeBuilder


class MessageLogPlugin:
    """
    Database plugin for the message log.

    Example:
        builder.add_plugin(MessageLogPlugin("sqlite+aiosqlite:///./messages.db"))

        # Usage in app
        page = await app.state.message_repository.list_page("my-session")
    """

    def __init__(
        self,
        connection_string: str,
        adapter: "DatabaseAdapter | None" = None,
        initialize_schema: bool = True,
        **adapter_kwargs: Any,
    ):
        """
        Initialize the message log plugin.

        Args:
            connection_string: Database connection URL
            adapter: DatabaseAdapter implementation, picked from the URL scheme if omitted
            initialize_schema: Whether to create the message table on startup
            **adapter_kwargs: Additional arguments for the database adapter
        """
        self.connection_string = connection_string
        self.adapter = adapter or adapter_for_url(connection_string)
        self.initialize_schema = initialize_schema
        self.adapter_kwargs = adapter_kwargs

        self.engine = None
        self.session_factory = None
        self.writer: MessageLogWriter | None = None

    def configure(self, builder: "BridgeBuilder") -> None:
        # Runs after the core startup hook so the event emitter exists
        builder.add_startup_hook(self.startup, priority=20)
        builder.add_shutdown_hook(self.shutdown, priority=20)

    async def startup(self, app: "FastAPI") -> None:
        """
        Create the engine, session factory and schema, then start recording.

        Raises:
            RuntimeError: If the database cannot be reached or initialized
        """
        logger = get_app_logger()

        try:
            logger.debug(
                f"Creating database engine with adapter: {self.adapter.__class__.__name__}"
            )
            self.engine = await self.adapter.create_engine(
                self.connection_string, **self.adapter_kwargs
            )
            self.session_factory = await self.adapter.create_session_factory(self.engine)

            if not await self.adapter.health_check(self.engine):
                raise RuntimeError("Database health check failed")

            if self.initialize_schema:
                await self.adapter.initialize_schema(self.engine, [Message])
                logger.info("Message log schema initialized")

            repository = MessageRepository(self.session_factory)
            app.state.db_engine = self.engine
            app.state.db_session = self.session_factory
            app.state.db_adapter = self.adapter
            app.state.message_repository = repository

            self.writer = MessageLogWriter(repository)
            app.state.event_emitter.subscribe(self.writer)

            connection_info = await self.adapter.get_connection_info(self.engine)
            logger.info(
                f"Message log initialized - "
                f"Driver: {connection_info.get('driver')}, "
                f"Database: {connection_info.get('database')}"
            )

        except Exception as e:
            logger.error(f"Failed to initialize message log: {e}", exc_info=True)
            raise RuntimeError(f"Message log startup failed: {e}") from e

    async def shutdown(self, app: "FastAPI") -> None:
        """Stop recording and dispose of the engine."""
        logger = get_app_logger()

        try:
            emitter = getattr(app.state, "event_emitter", None)
            if emitter is not None and self.writer is not None:
                emitter.unsubscribe(self.writer)

            if self.engine:
                await self.engine.dispose()
                logger.info("Database engine disposed successfully")

            for attribute in ("db_engine", "db_session", "db_adapter", "message_repository"):
                if hasattr(app.state, attribute):
                    delattr(app.state, attribute)

        except Exception as e:
            logger.error(f"Error during message log shutdown: {e}", exc_info=True)
