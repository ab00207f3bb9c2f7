"""Endpoint pipelines of the store API.

Each endpoint is an ordered list of steps (validate, build query, execute,
post-process) followed by a response. Every execute step opens its own
database connection and closes it before returning, on success or failure.
"""

import asyncio
import logging
import sqlite3
from typing import Callable

from fastapi import Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from ..clients import SqliteClient
from ..config import AppConfig
from ..models import Product
from . import queries
from .faq import faq_loader
from .queries import Query
from .steps import (
    DIY_MSG,
    FEEDBACK_MSG,
    ITEMS_NOT_AVAIL,
    Continue,
    Pipeline,
    Step,
    StepResult,
    bad_request,
    server_error,
)

logger = logging.getLogger(__name__)


def build(builder: Callable[..., Query]) -> Step:
    """Wrap a query builder as a step; building never fails."""

    def build_query(value) -> StepResult:
        return Continue(builder(value))

    return build_query


def _run_query(db_path: str, query: Query) -> list[dict]:
    with SqliteClient(db_path) as client:
        return client.execute_query(query.template, query.params)


def execute_read(db_path: str) -> Step:
    """Step that runs a SELECT and passes the rows on."""

    async def read(query: Query) -> StepResult:
        try:
            rows = await asyncio.to_thread(_run_query, db_path, query)
        except (sqlite3.Error, OverflowError):
            logger.exception(f"Read failed: {query.template}")
            return server_error()
        return Continue(rows)

    return read


def execute_write(db_path: str) -> Step:
    """Step that runs a single INSERT."""

    async def write(query: Query) -> StepResult:
        try:
            await asyncio.to_thread(_run_query, db_path, query)
        except (sqlite3.Error, OverflowError):
            logger.exception(f"Write failed: {query.template}")
            return server_error()
        return Continue(None)

    return write


def post_process(rows: list[dict]) -> StepResult:
    """Reject an empty result set, otherwise parse the rows as products."""
    if not rows:
        return bad_request(ITEMS_NOT_AVAIL)
    try:
        products = [Product.model_validate(row) for row in rows]
    except ValidationError:
        logger.exception("Stored product rows do not match the product model")
        return server_error()
    return Continue(products)


def respond_json(items) -> Response:
    return JSONResponse([item.model_dump() for item in items])


def respond_text(message: str) -> Callable[[object], Response]:
    def respond(_: object) -> Response:
        return PlainTextResponse(message)

    return respond


class StorePipelines:
    """The five endpoint pipelines, bound to one configuration."""

    def __init__(self, config: AppConfig):
        db_path = config.database.path

        self.product = Pipeline(
            "product",
            [queries.validate_product_id, build(queries.select_product_by_id),
             execute_read(db_path), post_process],
            respond_json,
        )
        self.category = Pipeline(
            "category",
            [queries.normalize_category, build(queries.select_products),
             execute_read(db_path), post_process],
            respond_json,
        )
        self.faq = Pipeline(
            "faq",
            [faq_loader(config.faq.path)],
            respond_json,
        )
        self.diy = Pipeline(
            "diy",
            [queries.validate_diy, build(queries.insert_diy_order), execute_write(db_path)],
            respond_text(DIY_MSG),
        )
        self.feedback = Pipeline(
            "feedback",
            [queries.validate_feedback, build(queries.insert_feedback), execute_write(db_path)],
            respond_text(FEEDBACK_MSG),
        )
