"""Shared fixtures: temporary store database, FAQ file, config and fake timers."""

import os
import tempfile

import pytest

from guitar_store.clients import SqliteClient
from guitar_store.config import (
    AppConfig,
    DatabaseConfig,
    FAQConfig,
    LoggingConfig,
    ServerConfig,
    StorefrontConfig,
)
from guitar_store.db import initialize_database
from guitar_store.models import Product

PRODUCTS = [
    Product(product_id=1, category="electric", name="Stratocaster", color="Red", price=1299.99,
            img="img/strat.jpg", description="Alder body\nMaple neck\nThree single-coil pickups"),
    Product(product_id=2, category="electric", name="Telecaster", color="Black", price=999.0,
            img="img/tele.jpg", description="Ash body\nMaple neck"),
    Product(product_id=3, category="acoustic", name="Dreadnought", color="Natural", price=10,
            img="img/dread.jpg", description="Spruce top"),
    Product(product_id=4, category="acoustic", name="Parlor", color="Sunburst", price=5,
            img="img/parlor.jpg", description="Mahogany top"),
    Product(product_id=5, category="bass", name="Jazz Bass", color="Blue", price=850,
            img="img/jazz.jpg", description="Two pickups"),
]

FAQ_TEXT = (
    "Do you ship internationally?\n"
    "Yes, to most countries.\n"
    "How long does a DIY build take?\n"
    "Four to six weeks.\n"
)


def make_config(db_path: str, faq_path: str, create_schema: bool = True, loading_time: float = 3.0) -> AppConfig:
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=8000, api_base="/guitar/"),
        database=DatabaseConfig(path=db_path, create_schema=create_schema),
        faq=FAQConfig(path=faq_path),
        logging=LoggingConfig(level="DEBUG"),
        storefront=StorefrontConfig(base_url="http://testserver", items_per_row=3, loading_time=loading_time),
    )


@pytest.fixture
def temp_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def seeded_db_path(temp_db_path):
    """Temporary database holding the store tables and the sample products."""
    initialize_database(temp_db_path)
    with SqliteClient(temp_db_path) as client:
        for p in PRODUCTS:
            client.execute_query(
                "INSERT INTO products(product_id, category, name, color, price, img, description) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (p.product_id, p.category, p.name, p.color, p.price, p.img, p.description),
            )
    return temp_db_path


@pytest.fixture
def faq_path():
    """Temporary FAQ source with two question/answer pairs."""
    fd, path = tempfile.mkstemp(suffix=".txt")
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(FAQ_TEXT)
    yield path
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def app_config(seeded_db_path, faq_path):
    return make_config(seeded_db_path, faq_path)


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False


class FakeTimers:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.scheduled: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.scheduled.append(handle)
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancelled = True

    def cancel_all(self):
        for handle in self.scheduled:
            handle.cancelled = True

    @property
    def pending(self):
        return len([h for h in self.scheduled if not h.cancelled and not h.fired])

    def fire_all(self):
        """Run every pending callback, as if the delays had elapsed."""
        for handle in list(self.scheduled):
            if not handle.cancelled and not handle.fired:
                handle.fired = True
                handle.callback()


@pytest.fixture
def fake_timers():
    return FakeTimers()
