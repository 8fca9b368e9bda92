"""Reminder jobs run by the in-process scheduler."""

from app.application.use_cases.reminders.reminder_jobs import (
    OVERDUE_BATCH_LIMIT,
    EmailMessage,
    JobReport,
    ReminderJobs,
    upcoming_failure_notification,
    week_bounds,
)

__all__ = [
    "OVERDUE_BATCH_LIMIT",
    "EmailMessage",
    "JobReport",
    "ReminderJobs",
    "upcoming_failure_notification",
    "week_bounds",
]
