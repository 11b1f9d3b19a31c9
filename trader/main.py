"""FastAPI application for the football trader match-profile service."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from trader.config import Settings, get_settings
from trader.database import Database
from trader.profiles.store import ProfileStore
from trader.routes.analysis import router as analysis_router
from trader.routes.core import router as core_router
from trader.routes.profiles import router as profiles_router
from trader.telemetry.sentry import init_sentry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    database: Database = app.state.database
    await database.init()
    logger.info("Football trader service started")
    try:
        yield
    finally:
        await database.close()


def create_app(
    settings: Optional[Settings] = None,
    gemini_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the app around an explicit Settings object.

    Run with: uvicorn trader.main:create_app --factory

    Args:
        settings: Configuration; the environment / .env settings when None.
        gemini_transport: httpx transport for Gemini calls (tests inject a mock).
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    # Only activates if SENTRY_DSN is set
    init_sentry(settings)

    app = FastAPI(
        title="Football Trader",
        description="Pasted-stats parsing, analytical flags and Gemini match profiles",
        version="1.0.0",
        lifespan=lifespan,
    )

    database = Database(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.database = database
    app.state.profile_store = ProfileStore(database)
    app.state.gemini_transport = gemini_transport

    app.include_router(core_router)
    app.include_router(analysis_router)
    app.include_router(profiles_router)
    return app
