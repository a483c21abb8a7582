"""
wabridge Database Components

Message log persistence on SQLModel/SQLAlchemy async engines.

Usage:
    from wabridge.database import MessageRepository, SQLiteAdapter

    adapter = SQLiteAdapter()
    engine = await adapter.create_engine("sqlite+aiosqlite:///./wabridge.db")
    repository = MessageRepository(await adapter.create_session_factory(engine))
"""

from .adapter import DatabaseAdapter, SessionFactory
from .adapters import PostgreSQLAdapter, SQLiteAdapter, adapter_for_url
from .message_log_writer import MessageLogWriter
from .message_repository import MessageRepository

__all__ = [
    "DatabaseAdapter",
    "MessageLogWriter",
    "MessageRepository",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
    "SessionFactory",
    "adapter_for_url",
]
