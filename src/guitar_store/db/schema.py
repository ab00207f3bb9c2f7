"""Table definitions for the store database.

Flat tables, one per record kind. ``initialize_database`` is idempotent and
is the only schema management the service performs.
"""

import logging

from ..clients import SqliteClient

logger = logging.getLogger(__name__)

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS products (
    product_id INTEGER PRIMARY KEY,
    category TEXT NOT NULL,
    name TEXT NOT NULL,
    color TEXT NOT NULL,
    price REAL NOT NULL,
    img TEXT NOT NULL,
    description TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);

CREATE TABLE IF NOT EXISTS diy_orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    type TEXT NOT NULL,
    n_material TEXT NOT NULL,
    b_material TEXT NOT NULL,
    color TEXT NOT NULL,
    engraving INTEGER NOT NULL,
    engraving_text TEXT
);

CREATE TABLE IF NOT EXISTS feedbacks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    feedback TEXT NOT NULL
);
"""


def initialize_database(db_path: str) -> None:
    """Create the store tables if they don't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    with SqliteClient(db_path) as client:
        client.execute_script(CREATE_TABLES_SQL)
    logger.debug("Store tables initialized at %s", db_path)
