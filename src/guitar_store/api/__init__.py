"""FastAPI application setup."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guitar_store.api.controller import create_guitar_router
from guitar_store.config import AppConfig, get_config
from guitar_store.db import initialize_database
from guitar_store.pipeline import StorePipelines

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration; loaded from the config file when omitted.
    """
    config = config or get_config()

    if config.database.create_schema:
        initialize_database(config.database.path)

    app = FastAPI(
        title="BF Guitars API",
        description="Product catalog, FAQ, DIY orders and feedback for the BF Guitars store",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Must precede the store router when api_base is "/"
    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    prefix = config.server.api_base.rstrip("/")
    app.include_router(create_guitar_router(StorePipelines(config), prefix=prefix))
    logger.info(f"Store API mounted at {config.server.api_base} using {config.database.path}")

    return app
