"""Reminder jobs: time-based scans that emit notifications.

Each job works inside the caller's transaction and returns a JobReport
with the emails to send; the caller commits first and sends afterwards,
so a rolled-back run never emails anyone.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.application.dtos.calendar import ReminderCandidate
from app.application.dtos.notification import NotificationCreate
from app.application.interfaces.repositories import (
    ICalendarEventRepository,
    IIncomingLetterRepository,
    ILetterRepository,
)
from app.application.interfaces.services import INotificationSink
from app.domain.enums import NotificationType
from app.shared.utils.datetime import days_until, utc_now
from app.shared.utils.formatting import format_date_id

logger = logging.getLogger(__name__)

REMINDER_WINDOW = timedelta(days=3)
OVERDUE_BATCH_LIMIT = 20
UNKNOWN_LOCATION = "Belum ditentukan"


@dataclass(frozen=True)
class EmailMessage:
    to_email: str
    subject: str
    html: str


@dataclass
class JobReport:
    """Outcome of one job run."""

    job: str
    notifications: int = 0
    emails: list[EmailMessage] = field(default_factory=list)


def upcoming_failure_notification() -> NotificationCreate:
    """Broadcast written when the upcoming-event job fails."""
    return NotificationCreate(
        title="System Error",
        message="Gagal memeriksa acara mendatang.",
        type=NotificationType.ERROR,
    )


def week_bounds(now: datetime, timezone: str) -> tuple[datetime, datetime]:
    """Monday 00:00 of the current week and the following Monday, in the given timezone."""
    tz = ZoneInfo(timezone)
    local = now.astimezone(tz)
    monday = local.date() - timedelta(days=local.weekday())
    start = datetime.combine(monday, time.min, tzinfo=tz)
    return start, start + timedelta(days=7)


def start_of_next_day(now: datetime, timezone: str) -> datetime:
    tz = ZoneInfo(timezone)
    tomorrow = now.astimezone(tz).date() + timedelta(days=1)
    return datetime.combine(tomorrow, time.min, tzinfo=tz)


class ReminderJobs:
    """Upcoming-event reminders, overdue invitations, weekly summary, follow-up deadlines."""

    def __init__(
        self,
        incoming_repo: IIncomingLetterRepository,
        outgoing_repo: ILetterRepository,
        event_repo: ICalendarEventRepository,
        notifications: INotificationSink,
        *,
        timezone: str = "Asia/Jakarta",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.incoming_repo = incoming_repo
        self.outgoing_repo = outgoing_repo
        self.event_repo = event_repo
        self.notifications = notifications
        self.timezone = timezone
        self.clock = clock

    def _reminder_text(self, candidate: ReminderCandidate, days: int) -> tuple[str, str]:
        event = candidate.event
        location = event.location or UNKNOWN_LOCATION
        if days == 1:
            return (
                "Pengingat Acara Besok",
                f'Acara "{event.title}" dijadwalkan untuk besok di lokasi: {location}',
            )
        when = format_date_id(event.date, self.timezone)
        return (
            "Pengingat Acara 3 Hari Lagi",
            f'Acara "{event.title}" dijadwalkan 3 hari lagi ({when}) di lokasi: {location}',
        )

    def _reminder_email(
        self, candidate: ReminderCandidate, title: str, message: str
    ) -> EmailMessage | None:
        if not candidate.owner_email:
            return None
        event = candidate.event
        when = format_date_id(event.date, self.timezone, with_weekday=True)
        if event.time:
            when = f"{when}, {event.time}"
        body = (
            f"<p><strong>{html.escape(title)}</strong></p>"
            f"<p>{html.escape(message)}</p>"
            f"<p><strong>Acara:</strong> {html.escape(event.title)}</p>"
            f"<p><strong>Tanggal:</strong> {html.escape(when)}</p>"
            f"<p><strong>Lokasi:</strong> {html.escape(event.location or UNKNOWN_LOCATION)}</p>"
        )
        return EmailMessage(to_email=candidate.owner_email, subject=title, html=body)

    async def check_upcoming_events(self) -> JobReport:
        """Send the 3-day and 1-day reminder once per event (flags guard each threshold)."""
        report = JobReport(job="upcoming_events")
        now = self.clock()
        candidates = await self.event_repo.list_reminder_candidates(now, now + REMINDER_WINDOW)
        for candidate in candidates:
            event = candidate.event
            days = days_until(event.date, now)
            if days == 3 and not event.notified_3_days:
                flags = {"three_days": True}
            elif days == 1 and not event.notified_1_day:
                flags = {"one_day": True}
            else:
                continue
            title, message = self._reminder_text(candidate, days)
            await self.notifications.create(
                NotificationCreate(
                    title=title,
                    message=message,
                    type=NotificationType.INFO,
                    calendar_event_id=event.id,
                )
            )
            await self.event_repo.mark_notified(event.id, **flags)
            report.notifications += 1
            email = self._reminder_email(candidate, title, message)
            if email is not None:
                report.emails.append(email)
        logger.info(
            "Upcoming events: %d candidates, %d reminders", len(candidates), report.notifications
        )
        return report

    async def check_overdue_invitations(self) -> JobReport:
        """One aggregate warning for at most OVERDUE_BATCH_LIMIT passed invitations."""
        report = JobReport(job="overdue_invitations")
        now = self.clock()
        overdue = await self.incoming_repo.list_overdue_invitations(now, OVERDUE_BATCH_LIMIT)
        if not overdue:
            logger.info("No new overdue invitations found")
            return report
        await self.notifications.create(
            NotificationCreate(
                title="Undangan Terlewat",
                message=(
                    f"{len(overdue)} undangan acara telah melewati batas waktu "
                    "dan mungkin memerlukan arsip atau tindak lanjut."
                ),
                type=NotificationType.WARNING,
            )
        )
        await self.incoming_repo.mark_overdue_notified([letter.id for letter in overdue], now)
        report.notifications = 1
        logger.info("Processed %d overdue invitations", len(overdue))
        return report

    async def generate_weekly_summary(self) -> JobReport:
        """Counts of letters recorded this week (Monday to Monday) per register."""
        report = JobReport(job="weekly_summary")
        start, end = week_bounds(self.clock(), self.timezone)
        incoming = await self.incoming_repo.count_created_between(start, end)
        outgoing = await self.outgoing_repo.count_created_between(start, end)
        await self.notifications.create(
            NotificationCreate(
                title="Rangkuman Mingguan",
                message=f"Minggu ini diproses: {incoming} surat masuk dan {outgoing} surat keluar.",
                type=NotificationType.INFO,
            )
        )
        report.notifications = 1
        logger.info("Weekly summary: %d incoming, %d outgoing", incoming, outgoing)
        return report

    async def check_follow_up_deadlines(self) -> JobReport:
        """Warn each owner whose follow-up deadline falls before the end of today."""
        report = JobReport(job="follow_up_deadlines")
        now = self.clock()
        letters = await self.incoming_repo.list_follow_ups_due(
            now, start_of_next_day(now, self.timezone)
        )
        for letter in letters:
            assert letter.follow_up_deadline is not None
            deadline = format_date_id(letter.follow_up_deadline, self.timezone)
            await self.notifications.create(
                NotificationCreate(
                    title="Deadline Tindak Lanjut",
                    message=f'Surat "{letter.subject}" perlu ditindaklanjuti sebelum {deadline}',
                    type=NotificationType.WARNING,
                    user_id=letter.user_id,
                )
            )
            report.notifications += 1
        logger.info("Follow-up deadlines: %d reminders", report.notifications)
        return report
