"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.calendar import (
        CalendarEventCard,
        CalendarEventData,
        CalendarEventResult,
        ReminderCandidate,
    )
    from app.application.dtos.common import PageRequest
    from app.application.dtos.disposition import DispositionResult
    from app.application.dtos.letter import LetterListFilter, LetterResult
    from app.application.dtos.notification import NotificationCreate, NotificationResult
    from app.application.dtos.user import UserResult
    from app.domain.enums import DispositionTarget, LetterDirection, UserRole


# Letter repository interface (one implementation per register)
class ILetterRepository(Protocol):
    """Protocol for a letter register (incoming or outgoing)."""

    direction: LetterDirection

    async def get_letter(
        self, letter_id: str, *, with_dispositions: bool = False
    ) -> LetterResult | None:
        """Return the letter with its owner (and dispositions, newest first, when asked)."""

    async def letter_number_taken(
        self, letter_number: str, *, exclude_id: str | None = None
    ) -> bool:
        """Return True if another letter in this register has the number."""

    async def create_letter(self, values: dict[str, Any], user_id: str) -> LetterResult:
        """Insert; raise DuplicateLetterNumberException on the unique constraint."""

    async def update_letter(
        self, letter_id: str, changes: dict[str, Any]
    ) -> LetterResult | None:
        """Apply changes; None when the letter does not exist."""

    async def delete_letter(self, letter_id: str) -> bool:
        """Delete; dependent dispositions and calendar event cascade."""

    async def list_letters(
        self, filters: LetterListFilter, page: PageRequest, now: datetime
    ) -> tuple[list[LetterResult], int]:
        """Return one page ordered by register date (newest first) and the total."""

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        """Count letters recorded in [start, end)."""


class IIncomingLetterRepository(ILetterRepository, Protocol):
    """Incoming register: adds the overdue and follow-up queries."""

    async def list_overdue_invitations(
        self, now: datetime, limit: int
    ) -> list[LetterResult]:
        """Invitations with event_date < now and overdue_notified_at unset."""

    async def mark_overdue_notified(self, letter_ids: list[str], at: datetime) -> int:
        """Stamp overdue_notified_at on rows where it is still unset."""

    async def list_follow_ups_due(
        self, start: datetime, end: datetime
    ) -> list[LetterResult]:
        """Letters needing follow-up with a deadline in [start, end)."""


# Disposition repository interface
class IDispositionRepository(Protocol):
    async def letter_exists(self, letter_id: str) -> bool:
        """Return True if the incoming letter exists."""

    async def create_disposition(
        self,
        letter_id: str,
        target: DispositionTarget,
        notes: str | None,
        created_by_id: str | None,
    ) -> DispositionResult:
        """Append a routing decision."""

    async def get_disposition(self, disposition_id: str) -> DispositionResult | None:
        """Return one disposition or None."""

    async def list_for_letter(self, letter_id: str) -> list[DispositionResult]:
        """Return the letter's dispositions, newest first."""

    async def list_all(self, page: PageRequest) -> tuple[list[DispositionResult], int]:
        """Return one page of all dispositions, newest first, and the total."""

    async def update_disposition(
        self, disposition_id: str, changes: dict[str, Any]
    ) -> DispositionResult | None:
        """Edit target/notes of the same row."""

    async def delete_disposition(self, disposition_id: str) -> bool:
        """Delete one disposition."""


# Calendar event repository interface
class ICalendarEventRepository(Protocol):
    async def get_for_letter(
        self, direction: LetterDirection, letter_id: str
    ) -> CalendarEventResult | None:
        """Return the event derived from the letter, if any."""

    async def create_event(
        self,
        direction: LetterDirection,
        letter_id: str,
        user_id: str,
        data: CalendarEventData,
    ) -> CalendarEventResult:
        """Create the event with both reminder flags false."""

    async def update_event(
        self, event_id: str, values: dict[str, Any]
    ) -> CalendarEventResult | None:
        """Overwrite event columns."""

    async def delete_for_letter(self, direction: LetterDirection, letter_id: str) -> bool:
        """Delete the letter's event; False when there was none."""

    async def list_between(self, start: datetime, end: datetime) -> list[CalendarEventCard]:
        """Events with start <= date <= end, ascending."""

    async def list_upcoming(self, now: datetime, limit: int) -> list[CalendarEventCard]:
        """Next events from now, ascending."""

    async def list_reminder_candidates(
        self, now: datetime, until: datetime
    ) -> list[ReminderCandidate]:
        """Events in [now, until] with at least one reminder flag still false."""

    async def mark_notified(
        self, event_id: str, *, three_days: bool = False, one_day: bool = False
    ) -> None:
        """Set reminder flags to true."""


# Notification repository interface
class INotificationRepository(Protocol):
    async def create_notification(self, data: NotificationCreate) -> NotificationResult:
        """Insert a notification (unread)."""

    async def get_visible(
        self, notification_id: str, user_id: str
    ) -> NotificationResult | None:
        """Return the notification if it is the user's own or a broadcast."""

    async def list_visible(
        self, user_id: str, page: PageRequest, *, unread_only: bool = False
    ) -> tuple[list[NotificationResult], int]:
        """Own and broadcast notifications, newest first, and the total."""

    async def count_unread(self, user_id: str) -> int:
        """Unread own and broadcast notifications."""

    async def mark_read(self, notification_id: str) -> None:
        """Set is_read (never cleared)."""

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every visible unread notification read; return how many changed."""


# User repository interface
class IUserRepository(Protocol):
    async def get_user(self, user_id: str) -> UserResult | None:
        """Return user by id."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user when the password matches."""

    async def create_user(
        self, email: str, name: str, password: str, role: UserRole = ...
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException when the email is taken."""
