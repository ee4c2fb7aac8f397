"""FastAPI application factory for the dispatch engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notification_engine.config import get_settings
from notification_engine.infrastructure.database import engine, initialize_database
from notification_engine.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the notification tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    logging.basicConfig(level=get_settings().log_level.upper())

    app = FastAPI(title="Notification dispatch engine", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
