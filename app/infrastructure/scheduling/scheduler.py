"""In-process reminder scheduler: one asyncio task per job, each with a re-entrancy guard.

The guard is an asyncio.Lock per job, so a job never overlaps itself
within this process. It is not a cross-instance lock: with several
application instances each one runs every job. Deploy one instance with
SCHEDULER_ENABLED=true, or replace JobGuard with a lease row in the
database.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.infrastructure.scheduling import triggers
from app.infrastructure.scheduling.runner import (
    FOLLOW_UP_DEADLINES,
    OVERDUE_INVITATIONS,
    UPCOMING_EVENTS,
    WEEKLY_SUMMARY,
    ReminderRunner,
)
from app.infrastructure.scheduling.triggers import JobTrigger
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class JobGuard:
    """Per-job mutex: a run is skipped while the previous run of the same job holds it."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, name: str) -> asyncio.Lock:
        return self._locks.setdefault(name, asyncio.Lock())

    def is_running(self, name: str) -> bool:
        return self._lock(name).locked()

    async def run(self, name: str, job: Callable[[], Awaitable[Any]]) -> bool:
        """Run job unless already running. Returns False when skipped."""
        lock = self._lock(name)
        if lock.locked():
            logger.warning("Job %s is already running. Skipping.", name)
            return False
        async with lock:
            try:
                await job()
            except Exception:
                logger.exception("Job %s raised", name)
        return True


@dataclass(frozen=True)
class ScheduledJob:
    name: str
    trigger: JobTrigger
    job: Callable[[], Awaitable[Any]]


def default_jobs(runner: ReminderRunner) -> list[ScheduledJob]:
    """Upcoming events 09:00, overdue 18:00, weekly summary Monday 08:00, follow-ups 08:00."""
    return [
        ScheduledJob(UPCOMING_EVENTS, triggers.UPCOMING_EVENTS, runner.job(UPCOMING_EVENTS)),
        ScheduledJob(
            OVERDUE_INVITATIONS, triggers.OVERDUE_INVITATIONS, runner.job(OVERDUE_INVITATIONS)
        ),
        ScheduledJob(WEEKLY_SUMMARY, triggers.WEEKLY_SUMMARY, runner.job(WEEKLY_SUMMARY)),
        ScheduledJob(
            FOLLOW_UP_DEADLINES, triggers.FOLLOW_UP_DEADLINES, runner.job(FOLLOW_UP_DEADLINES)
        ),
    ]


class ReminderScheduler:
    """Start/stop the job loops. Jobs are independent; one failing never stops another."""

    def __init__(
        self,
        jobs: list[ScheduledJob],
        *,
        timezone: str = "Asia/Jakarta",
        clock: Callable[[], datetime] = utc_now,
        guard: JobGuard | None = None,
    ) -> None:
        self.jobs = jobs
        self.timezone = timezone
        self.clock = clock
        self.guard = guard or JobGuard()
        self._tasks: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    async def run_once(self, name: str) -> bool:
        """Run one job now through its guard (returns False when skipped)."""
        for scheduled in self.jobs:
            if scheduled.name == name:
                return await self.guard.run(name, scheduled.job)
        raise ValueError(f"Unknown job: {name}")

    async def _loop(self, scheduled: ScheduledJob) -> None:
        last_fire: datetime | None = None
        while True:
            now = self.clock()
            # Never fire the same slot twice if the sleep woke early.
            reference = now if last_fire is None else max(now, last_fire)
            next_run = scheduled.trigger.next_run(reference, self.timezone)
            delay = max((next_run - now).total_seconds(), 0.0)
            logger.debug("Job %s next run at %s", scheduled.name, next_run.isoformat())
            await asyncio.sleep(delay)
            last_fire = next_run
            await self.guard.run(scheduled.name, scheduled.job)

    def start(self) -> None:
        if self.running:
            return
        for scheduled in self.jobs:
            task = asyncio.create_task(self._loop(scheduled), name=f"reminder:{scheduled.name}")
            self._tasks.append(task)
            logger.info("Scheduled job %s (%s, %s)", scheduled.name, scheduled.trigger.describe(), self.timezone)

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        if tasks:
            logger.info("Reminder scheduler stopped")
