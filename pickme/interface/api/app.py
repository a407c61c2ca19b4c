"""FastAPI application."""

import asyncio
import contextlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from pickme.config import Settings
from pickme.interface.api.routes import (
    health,
    matches,
    meetups,
    pick_requests,
    users,
)
from pickme.interface.api.sweeper import run_expiry_sweeper
from pickme.persistence.database import create_tables
from pickme.util.di.container import create_container, setup_di
from pickme.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start background work on startup and tear it down on shutdown.

    The container is read from ``app.state`` so that tests can swap it in
    with ``setup_di`` after ``create_app``.
    """
    container: AsyncContainer = app.state.dishka_container
    settings = await container.get(Settings)

    if settings.database.create_tables:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)

    sweeper: asyncio.Task[None] | None = None
    if settings.matching.expiry_sweep_enabled:
        sweeper = asyncio.create_task(
            run_expiry_sweeper(
                container, settings.matching.expiry_sweep_interval_seconds
            )
        )

    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper
            logfire.info("Expiry sweeper stopped")
        await container.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    app_instance = FastAPI(
        title="PickMe API",
        description="Backend API for PickMe - pin an activity on the map, get picked, meet up, review",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(pick_requests.router)
    app_instance.include_router(matches.router)
    app_instance.include_router(meetups.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
