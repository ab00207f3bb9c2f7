"""Client modules for external services."""

from guitar_store.clients.sqlite_client import SqliteClient

__all__ = ["SqliteClient"]
