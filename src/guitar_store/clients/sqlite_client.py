import sqlite3
from typing import Any, Optional, Sequence


class SqliteClient:
    """SQLite database client with connection management.

    One client wraps one connection; open it per unit of work and close it
    with ``with SqliteClient(path) as client: ...``.
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self._connection = sqlite3.connect(self.connection_string)
        self._connection.row_factory = sqlite3.Row

    def execute_query(self, query: str, params: Optional[Sequence[Any]] = None) -> list[dict[str, Any]]:
        """Execute a query and return all rows as dictionaries."""
        cursor = self._connection.cursor()
        try:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)

            # Commit for write operations (INSERT, UPDATE, DELETE)
            if query.strip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
                self._connection.commit()

            return [dict(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def execute_script(self, script: str) -> None:
        """Execute several semicolon-separated statements."""
        self._connection.executescript(script)
        self._connection.commit()

    def close(self):
        """Close the database connection."""
        self._connection.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
        return False
