"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (reminder scheduler, DB engine
dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: reminder scheduler (when SCHEDULER_ENABLED and DATABASE_URL
    are set). Shutdown: scheduler stop, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.reminder_scheduler = None
    if settings.scheduler_enabled and settings.sql_configured:
        from app.infrastructure.external.email import create_mailer
        from app.infrastructure.persistence.database import get_session_factory
        from app.infrastructure.scheduling import (
            ReminderRunner,
            ReminderScheduler,
            default_jobs,
        )

        runner = ReminderRunner(
            get_session_factory(),
            create_mailer(settings),
            timezone=settings.scheduler_timezone,
        )
        scheduler = ReminderScheduler(
            default_jobs(runner), timezone=settings.scheduler_timezone
        )
        scheduler.start()
        app.state.reminder_scheduler = scheduler
        logger.info("Reminder scheduler started")
    elif settings.scheduler_enabled:
        logger.warning("Reminder scheduler disabled: DATABASE_URL is not set")

    yield

    # ---- Shutdown ----
    scheduler = getattr(app.state, "reminder_scheduler", None)
    if scheduler is not None:
        await scheduler.stop()
        app.state.reminder_scheduler = None

    from app.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
