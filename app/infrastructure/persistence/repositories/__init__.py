"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.calendar_event_repo import (
    CalendarEventRepository,
)
from app.infrastructure.persistence.repositories.disposition_repo import (
    DispositionRepository,
)
from app.infrastructure.persistence.repositories.letter_repo import (
    IncomingLetterRepository,
    LetterRepository,
    OutgoingLetterRepository,
)
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CalendarEventRepository",
    "DispositionRepository",
    "IncomingLetterRepository",
    "LetterRepository",
    "NotificationRepository",
    "OutgoingLetterRepository",
    "UserRepository",
]
