"""
Database Adapter Protocol

Defines the interface for database adapters that work with SQLModel and
SQLAlchemy async engines. Each adapter handles database-specific connection
patterns, configuration, and schema management.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, AsyncContextManager, Protocol

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine
    from sqlmodel import SQLModel
    from sqlmodel.ext.asyncio.session import AsyncSession


SessionFactory = Callable[[], AsyncContextManager["AsyncSession"]]


class DatabaseAdapter(Protocol):
    """
    Database adapter interface for SQLModel/SQLAlchemy async connections.

    Implemented by the SQLite and PostgreSQL adapters so the message log can
    run on either engine.
    """

    async def create_engine(
        self, connection_string: str, **kwargs: Any
    ) -> "AsyncEngine":
        """
        Create an async SQLAlchemy engine for the database.

        Raises:
            ValueError: If the connection string uses an unsupported scheme
            ConnectionError: If unable to create engine
        """
        ...

    async def create_session_factory(self, engine: "AsyncEngine") -> SessionFactory:
        """
        Create a session factory for the database engine.

        Sessions commit when the context exits cleanly and roll back on error.

        Example:
            session_factory = await adapter.create_session_factory(engine)
            async with session_factory() as session:
                ...
        """
        ...

    async def initialize_schema(
        self, engine: "AsyncEngine", models: list[type["SQLModel"]] | None = None
    ) -> None:
        """
        Create the tables of the given SQLModel classes (all tables if None).

        Raises:
            RuntimeError: If schema creation fails
        """
        ...

    async def health_check(self, engine: "AsyncEngine") -> bool:
        """Return True if the database answers a trivial query."""
        ...

    async def get_connection_info(self, engine: "AsyncEngine") -> dict[str, Any]:
        """Return driver / version information for logging."""
        ...
