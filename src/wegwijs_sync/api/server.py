"""FastAPI application exposing the sync trigger and running the healing schedule."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import FastAPI

from wegwijs_sync import __version__
from wegwijs_sync.scheduling import HealingScheduler

from . import routes

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from wegwijs_sync.app import SyncServices

log = getLogger(__name__)


def create_app(services: SyncServices, *, schedule_healing: bool | None = None) -> FastAPI:
    """Create the application around already wired services.

    ``schedule_healing`` overrides the scheduler setting; tests pass ``False``.
    """

    enabled = services.settings.scheduler.enabled if schedule_healing is None else schedule_healing

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler: HealingScheduler | None = None
        if enabled:
            scheduler = HealingScheduler(services.settings.scheduler, services.sweep)
            scheduler.start()
        else:
            log.info("Healing schedule disabled")
        app.state.scheduler = scheduler
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()

    app = FastAPI(title="Wegwijs KBO sync", version=__version__, lifespan=lifespan)
    app.state.services = services
    app.include_router(routes.router)
    return app
