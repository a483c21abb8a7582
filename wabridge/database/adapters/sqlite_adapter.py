"""
SQLite Database Adapter

Provides SQLite-specific implementation for SQLModel/SQLAlchemy async connections
using aiosqlite as the async driver.
"""

from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..adapter import SessionFactory


class SQLiteAdapter:
    """
    SQLite adapter for SQLModel/SQLAlchemy async connections.

    Uses aiosqlite driver for async SQLite operations.
    """

    async def create_engine(self, connection_string: str, **kwargs: Any) -> AsyncEngine:
        """
        Create SQLite async engine with aiosqlite driver.

        Args:
            connection_string: SQLite connection URL (sqlite+aiosqlite://...)
            **kwargs: Engine configuration options

        Raises:
            ValueError: If connection string is invalid
            ConnectionError: If unable to create engine
        """
        if not connection_string.startswith("sqlite+aiosqlite://"):
            if connection_string.startswith("sqlite://"):
                connection_string = connection_string.replace(
                    "sqlite://", "sqlite+aiosqlite://", 1
                )
            else:
                raise ValueError(
                    "SQLite connection string must use sqlite+aiosqlite:// scheme"
                )

        default_config = {
            "echo": False,
            "connect_args": {
                "check_same_thread": False,  # Required for async
                "timeout": 30,
            },
        }
        default_config.update(kwargs)

        try:
            return create_async_engine(connection_string, **default_config)
        except Exception as e:
            raise ConnectionError(f"Failed to create SQLite engine: {e}") from e

    async def create_session_factory(self, engine: AsyncEngine) -> SessionFactory:
        async_session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        @asynccontextmanager
        async def session_factory():
            async with async_session_maker() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        return session_factory

    async def initialize_schema(
        self, engine: AsyncEngine, models: list[type[SQLModel]] | None = None
    ) -> None:
        tables = [model.__table__ for model in models] if models else None
        try:
            async with engine.begin() as conn:
                await conn.execute(text("PRAGMA foreign_keys=ON"))
                await conn.run_sync(SQLModel.metadata.create_all, tables=tables)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize SQLite schema: {e}") from e

    async def health_check(self, engine: AsyncEngine) -> bool:
        try:
            async with engine.begin() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception:
            return False

    async def get_connection_info(self, engine: AsyncEngine) -> dict[str, Any]:
        try:
            async with engine.begin() as conn:
                version_result = await conn.execute(text("SELECT sqlite_version()"))
                version = version_result.scalar()

                pragma_result = await conn.execute(text("PRAGMA database_list"))
                database_info = pragma_result.fetchall()

                return {
                    "driver": "aiosqlite",
                    "database": "sqlite",
                    "version": version,
                    "database_file": database_info[0][2] if database_info else "memory",
                    "healthy": True,
                }
        except Exception as e:
            return {
                "driver": "aiosqlite",
                "database": "sqlite",
                "error": str(e),
                "healthy": False,
            }
