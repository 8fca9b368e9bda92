"""Application use cases: one entry point per workflow."""

from app.application.use_cases.calendar import CalendarEventProjector, CalendarQueryService
from app.application.use_cases.dispositions import DispositionRouter
from app.application.use_cases.letters import LetterService
from app.application.use_cases.notifications import NotificationSink
from app.application.use_cases.reminders import ReminderJobs

__all__ = [
    "CalendarEventProjector",
    "CalendarQueryService",
    "DispositionRouter",
    "LetterService",
    "NotificationSink",
    "ReminderJobs",
]
