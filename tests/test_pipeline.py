"""Tests for the step dispatcher and the execute steps."""

import sqlite3

import pytest

from guitar_store.pipeline import handlers
from guitar_store.pipeline.handlers import execute_read, execute_write, post_process
from guitar_store.pipeline.queries import Query
from guitar_store.pipeline.steps import (
    ITEMS_NOT_AVAIL,
    SERVER_ERROR,
    Continue,
    Fail,
    Pipeline,
    run_steps,
)
from fastapi.responses import PlainTextResponse


class TestRunSteps:
    """run_steps hands values forward and stops at the first failure."""

    @pytest.mark.asyncio
    async def test_sync_and_async_steps(self):
        async def double(value):
            return Continue(value * 2)

        result = await run_steps([lambda v: Continue(v + 1), double], 3)

        assert result == Continue(8)

    @pytest.mark.asyncio
    async def test_short_circuits_on_fail(self):
        calls = []

        def later(value):
            calls.append(value)
            return Continue(value)

        result = await run_steps([lambda v: Fail(400, "nope"), later], 1)

        assert result == Fail(400, "nope")
        assert calls == []

    @pytest.mark.asyncio
    async def test_no_steps_passes_initial(self):
        assert await run_steps([], "x") == Continue("x")


class TestPipeline:
    @pytest.mark.asyncio
    async def test_failure_is_plain_text(self):
        pipeline = Pipeline("test", [lambda v: Fail(400, "bad input")], lambda v: PlainTextResponse("ok"))

        response = await pipeline.handle(None)

        assert response.status_code == 400
        assert response.body == b"bad input"
        assert response.media_type == "text/plain"

    @pytest.mark.asyncio
    async def test_success_uses_respond(self):
        pipeline = Pipeline("test", [lambda v: Continue(v.upper())], lambda v: PlainTextResponse(v))

        response = await pipeline.handle("hi")

        assert response.status_code == 200
        assert response.body == b"HI"


class RecordingClient:
    """Stands in for SqliteClient and records whether it was closed."""

    instances = []

    def __init__(self, path, error=None, rows=None):
        self.closed = False
        self._error = error
        self._rows = rows or []
        RecordingClient.instances.append(self)

    def execute_query(self, query, params=None):
        if self._error:
            raise self._error
        return self._rows

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True
        return False


class TestExecuteSteps:
    """Execute steps release their connection on every path."""

    @pytest.fixture(autouse=True)
    def reset_instances(self):
        RecordingClient.instances = []

    @pytest.mark.asyncio
    async def test_read_failure_closes_and_reports_500(self, monkeypatch):
        monkeypatch.setattr(
            handlers, "SqliteClient",
            lambda path: RecordingClient(path, error=sqlite3.OperationalError("no such table")),
        )

        result = await execute_read("store.db")(Query("SELECT * FROM products"))

        assert result == Fail(500, SERVER_ERROR)
        assert RecordingClient.instances[0].closed

    @pytest.mark.asyncio
    async def test_read_success_closes(self, monkeypatch):
        rows = [{"product_id": 1}]
        monkeypatch.setattr(handlers, "SqliteClient", lambda path: RecordingClient(path, rows=rows))

        result = await execute_read("store.db")(Query("SELECT * FROM products"))

        assert result == Continue(rows)
        assert RecordingClient.instances[0].closed

    @pytest.mark.asyncio
    async def test_read_overflow_reports_500(self, monkeypatch):
        monkeypatch.setattr(
            handlers, "SqliteClient",
            lambda path: RecordingClient(path, error=OverflowError("Python int too large to convert to SQLite INTEGER")),
        )

        result = await execute_read("store.db")(Query("SELECT * FROM products WHERE product_id=?", (2**64,)))

        assert result == Fail(500, SERVER_ERROR)
        assert RecordingClient.instances[0].closed

    @pytest.mark.asyncio
    async def test_write_failure_closes(self, monkeypatch):
        monkeypatch.setattr(
            handlers, "SqliteClient",
            lambda path: RecordingClient(path, error=sqlite3.IntegrityError("constraint")),
        )

        result = await execute_write("store.db")(Query("INSERT INTO feedbacks(name, feedback) VALUES (?, ?)", ("a", "b")))

        assert result == Fail(500, SERVER_ERROR)
        assert RecordingClient.instances[0].closed

    @pytest.mark.asyncio
    async def test_fresh_connection_per_call(self, monkeypatch):
        monkeypatch.setattr(handlers, "SqliteClient", lambda path: RecordingClient(path))
        step = execute_write("store.db")

        await step(Query("INSERT INTO feedbacks(name, feedback) VALUES (?, ?)", ("a", "b")))
        await step(Query("INSERT INTO feedbacks(name, feedback) VALUES (?, ?)", ("c", "d")))

        assert len(RecordingClient.instances) == 2
        assert all(c.closed for c in RecordingClient.instances)


class TestPostProcess:
    def test_empty_result(self):
        assert post_process([]) == Fail(400, ITEMS_NOT_AVAIL)

    def test_rows_become_products(self):
        row = {"product_id": 7, "category": "bass", "name": "P Bass", "color": "White",
               "price": 700.0, "img": "p.jpg", "description": "Split coil"}

        result = post_process([row])

        assert isinstance(result, Continue)
        assert result.value[0].product_id == 7
        assert result.value[0].display_name == "White P Bass"

    def test_malformed_row_is_500(self):
        assert post_process([{"product_id": 1}]) == Fail(500, SERVER_ERROR)
