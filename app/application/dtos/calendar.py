"""DTOs for the calendar projector and calendar queries (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import EventType, LetterDirection


@dataclass(frozen=True)
class CalendarEventData:
    """Event fields derived from an invitation letter."""

    title: str
    description: str
    date: datetime
    time: str | None
    location: str | None
    type: EventType = EventType.MEETING


@dataclass(frozen=True)
class CalendarEventResult:
    id: str
    title: str
    description: str | None
    date: datetime
    time: str | None
    location: str | None
    type: EventType
    notified_3_days: bool
    notified_1_day: bool
    incoming_letter_id: str | None
    outgoing_letter_id: str | None
    user_id: str
    created_at: datetime
    updated_at: datetime

    @property
    def direction(self) -> LetterDirection:
        if self.incoming_letter_id is not None:
            return LetterDirection.INCOMING
        return LetterDirection.OUTGOING

    @property
    def letter_id(self) -> str:
        return self.incoming_letter_id or self.outgoing_letter_id or ""


@dataclass(frozen=True)
class CalendarEventCard:
    """Calendar list item: the event plus the letter it came from."""

    id: str
    title: str
    date: datetime
    time: str | None
    location: str | None
    description: str | None
    type: LetterDirection
    letter_number: str
    letter_subject: str


@dataclass(frozen=True)
class ReminderCandidate:
    """An event due for a reminder, with the letter owner to email."""

    event: CalendarEventResult
    owner_email: str | None
    owner_name: str | None
