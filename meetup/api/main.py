"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, builds the store handle at
startup, sweeps expired sessions before serving, and schedules the
recurring sweep.

Dependencies: fastapi, uvicorn, meetup.api.routers, meetup.configs
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meetup import __version__
from meetup.api.deps import get_service_cache
from meetup.api.error_handling import register_exception_handlers
from meetup.application.services import PeriodicReaper, reap_best_effort
from meetup.boundary.db import create_all_tables
from meetup.configs import get_settings
from meetup.observability.logger import configure_logging
from meetup.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    health_router,
    locations_router,
    messages_router,
    sessions_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: configure logging, create tables, run the retention sweep
    before any request is served, start the periodic reaper.
    Shutdown: stop the reaper and dispose the store handle.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    cache = get_service_cache()
    await create_all_tables(cache.db_engine)
    engine = cache.session_engine

    reaped = await reap_best_effort(engine)
    logger.info("Startup retention sweep finished", extra={"reaped": reaped})

    reaper = PeriodicReaper(engine, interval=settings.engine.reap_interval_seconds)
    reaper.start()
    app.state.reaper = reaper

    yield

    await reaper.stop()
    await cache.close()
    logger.info("Session store closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="Meetup Sync API",
        description="Ephemeral meetup sessions with group chat and live locations",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.engine.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api")
    app.include_router(sessions_router, prefix="/api")
    app.include_router(messages_router, prefix="/api")
    app.include_router(locations_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "meetup.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
