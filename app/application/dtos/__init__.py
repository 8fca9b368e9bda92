"""Application DTOs (no ORM dependency)."""

from app.application.dtos.calendar import (
    CalendarEventCard,
    CalendarEventData,
    CalendarEventResult,
    ReminderCandidate,
)
from app.application.dtos.common import Page, PageRequest, Pagination
from app.application.dtos.disposition import DispositionLetterSummary, DispositionResult
from app.application.dtos.letter import (
    UNSET,
    AttachmentUpload,
    LetterCreate,
    LetterListFilter,
    LetterPatch,
    LetterResult,
    StoredFile,
)
from app.application.dtos.notification import (
    NotificationCreate,
    NotificationPage,
    NotificationResult,
)
from app.application.dtos.user import UserResult, UserSummary

__all__ = [
    "UNSET",
    "AttachmentUpload",
    "CalendarEventCard",
    "CalendarEventData",
    "CalendarEventResult",
    "DispositionLetterSummary",
    "DispositionResult",
    "LetterCreate",
    "LetterListFilter",
    "LetterPatch",
    "LetterResult",
    "NotificationCreate",
    "NotificationPage",
    "NotificationResult",
    "Page",
    "PageRequest",
    "Pagination",
    "ReminderCandidate",
    "StoredFile",
    "UserResult",
    "UserSummary",
]
