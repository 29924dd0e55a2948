"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from yumix.application.jobs import build_scheduler
from yumix.config import get_settings
from yumix.infrastructure import database
from yumix.interfaces.api.routes import register_routes
from yumix.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the schema, start the recurring jobs and tear both down on exit."""

    settings = get_settings()
    database.initialize_database()
    scheduler = app.state.scheduler
    if settings.scheduler_enabled:
        scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()
        database.engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="YuMix API", debug=settings.debug, lifespan=lifespan)
    app.state.scheduler = build_scheduler(settings)
    register_routes(app)
    return app
