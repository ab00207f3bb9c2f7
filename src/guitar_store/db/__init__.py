"""Store database schema."""

from guitar_store.db.schema import CREATE_TABLES_SQL, initialize_database

__all__ = ["CREATE_TABLES_SQL", "initialize_database"]
