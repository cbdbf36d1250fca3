"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (logging setup, SQL engine
dispose); no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence.database import dispose_engine
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup; dispose the SQL engine on shutdown."""
    settings = get_settings()
    setup_logging()
    if not settings.database_url:
        logger.warning("DATABASE_URL is not set; assignment endpoints will return 503")
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
