"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from speciesatlas.system.structlog_configurator import configure_structlog
from speciesatlas.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Configures logging from the loaded config, creates the database tables,
    and disposes of the database engine on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    database_service = container.database_service()
    await database_service.initialize()

    logger.info("%s started", config.site_name)
    try:
        yield
    finally:
        await database_service.dispose()
        logger.info("%s stopped", config.site_name)
