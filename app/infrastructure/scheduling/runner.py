"""Runs one reminder job in its own database session, then sends its emails."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Final

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.services import IMailer
from app.application.use_cases.notifications import NotificationSink
from app.application.use_cases.reminders import (
    JobReport,
    ReminderJobs,
    upcoming_failure_notification,
)
from app.infrastructure.persistence.repositories import (
    CalendarEventRepository,
    IncomingLetterRepository,
    NotificationRepository,
    OutgoingLetterRepository,
)

logger = logging.getLogger(__name__)

UPCOMING_EVENTS: Final = "upcoming_events"
OVERDUE_INVITATIONS: Final = "overdue_invitations"
WEEKLY_SUMMARY: Final = "weekly_summary"
FOLLOW_UP_DEADLINES: Final = "follow_up_deadlines"

_JOB_METHODS: Final = {
    UPCOMING_EVENTS: "check_upcoming_events",
    OVERDUE_INVITATIONS: "check_overdue_invitations",
    WEEKLY_SUMMARY: "generate_weekly_summary",
    FOLLOW_UP_DEADLINES: "check_follow_up_deadlines",
}
JOB_NAMES: Final = tuple(_JOB_METHODS)


def build_reminder_jobs(session: AsyncSession, timezone: str) -> ReminderJobs:
    """Composition for one job run: repositories bound to the run's session."""
    return ReminderJobs(
        incoming_repo=IncomingLetterRepository(session),
        outgoing_repo=OutgoingLetterRepository(session),
        event_repo=CalendarEventRepository(session),
        notifications=NotificationSink(NotificationRepository(session)),
        timezone=timezone,
    )


class ReminderRunner:
    """run(job) never raises: failures are logged and the session rolled back.

    Emails go out only after the job's transaction committed.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        mailer: IMailer,
        *,
        timezone: str = "Asia/Jakarta",
        jobs_factory: Callable[[AsyncSession, str], ReminderJobs] = build_reminder_jobs,
    ) -> None:
        self.session_factory = session_factory
        self.mailer = mailer
        self.timezone = timezone
        self.jobs_factory = jobs_factory

    def job(self, name: str) -> Callable[[], Awaitable[JobReport | None]]:
        if name not in _JOB_METHODS:
            raise ValueError(f"Unknown reminder job: {name}. Choose from {', '.join(JOB_NAMES)}")

        async def _run() -> JobReport | None:
            return await self.run(name)

        return _run

    async def run(self, name: str) -> JobReport | None:
        method = _JOB_METHODS[name]
        logger.info("Running reminder job %s", name)
        try:
            async with self.session_factory() as session:
                try:
                    jobs = self.jobs_factory(session, self.timezone)
                    report = await getattr(jobs, method)()
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except Exception:
            logger.exception("Reminder job %s failed", name)
            if name == UPCOMING_EVENTS:
                await self._report_failure()
            return None
        await self._send_emails(report)
        return report

    async def _send_emails(self, report: JobReport) -> None:
        for message in report.emails:
            try:
                await self.mailer.send(message.to_email, message.subject, message.html)
            except Exception:
                logger.exception("Mailer raised for %s", message.to_email)

    async def _report_failure(self) -> None:
        """Write the ERROR broadcast in a fresh session."""
        try:
            async with self.session_factory() as session:
                await NotificationRepository(session).create_notification(
                    upcoming_failure_notification()
                )
                await session.commit()
        except Exception:
            logger.exception("Could not record reminder failure notification")
