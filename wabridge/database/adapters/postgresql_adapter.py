"""
PostgreSQL Database Adapter

Provides PostgreSQL-specific implementation for SQLModel/SQLAlchemy async connections
using asyncpg as the async driver.
"""

from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..adapter import SessionFactory


class PostgreSQLAdapter:
    """
    PostgreSQL adapter for SQLModel/SQLAlchemy async connections.

    Uses asyncpg driver; provides connection pooling, health checks and
    schema management.
    """

    async def create_engine(self, connection_string: str, **kwargs: Any) -> AsyncEngine:
        """
        Create PostgreSQL async engine with asyncpg driver.

        Raises:
            ValueError: If connection string is invalid
            ConnectionError: If unable to create engine
        """
        if not connection_string.startswith(
            ("postgresql+asyncpg://", "postgres+asyncpg://")
        ):
            if connection_string.startswith("postgresql://"):
                connection_string = connection_string.replace(
                    "postgresql://", "postgresql+asyncpg://", 1
                )
            elif connection_string.startswith("postgres://"):
                connection_string = connection_string.replace(
                    "postgres://", "postgresql+asyncpg://", 1
                )
            else:
                raise ValueError(
                    "PostgreSQL connection string must use postgresql+asyncpg:// scheme"
                )

        default_config = {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "echo": False,
        }
        default_config.update(kwargs)

        try:
            return create_async_engine(connection_string, **default_config)
        except Exception as e:
            raise ConnectionError(f"Failed to create PostgreSQL engine: {e}") from e

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
                await conn.run_sync(SQLModel.metadata.create_all, tables=tables)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize PostgreSQL schema: {e}") from e

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
                version_result = await conn.execute(text("SELECT version()"))
                version = version_result.scalar()

                return {
                    "driver": "asyncpg",
                    "database": "postgresql",
                    "version": version,
                    "pool_size": engine.pool.size(),
                    "pool_checked_out": engine.pool.checkedout(),
                }
        except Exception as e:
            return {
                "driver": "asyncpg",
                "database": "postgresql",
                "error": str(e),
                "healthy": False,
            }
