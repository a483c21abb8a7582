"""
Database adapters for the message log.
"""

from .postgresql_adapter import PostgreSQLAdapter
from .sqlite_adapter import SQLiteAdapter

__all__ = ["PostgreSQLAdapter", "SQLiteAdapter", "adapter_for_url"]


def adapter_for_url(connection_string: str):
    """Pick the adapter matching a connection URL scheme.

    Raises:
        ValueError: If no adapter handles the scheme
    """
    if connection_string.startswith("sqlite"):
        return SQLiteAdapter()
    if connection_string.startswith(("postgresql", "postgres")):
        return PostgreSQLAdapter()
    raise ValueError(f"Unsupported database URL: {connection_string.split('://', 1)[0]}")
