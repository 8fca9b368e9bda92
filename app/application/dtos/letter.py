"""DTOs for letter use cases (no dependency on ORM).

LetterCreate is the write-model for a new letter; LetterPatch carries an
update where every field is UNSET (not provided) or a value (None clears a
nullable field). LetterResult is the read-model for both registers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Final

from app.application.dtos.disposition import DispositionResult
from app.application.dtos.user import UserSummary
from app.domain.entities.letter import LetterSchedule
from app.domain.enums import (
    DispositionMethod,
    DispositionTarget,
    LetterDirection,
    LetterNature,
    SecurityClass,
)


class _Unset:
    """Marker for a patch field that was not provided."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

INCOMING_ONLY_FIELDS: Final = (
    "received_date",
    "disposition_target",
    "needs_follow_up",
    "follow_up_deadline",
)
OUTGOING_ONLY_FIELDS: Final = (
    "created_date",
    "execution_date",
    "classification_code",
    "serial_number",
    "security_class",
)

# Register date each direction validates eventDate against: (attribute, API field).
ANCHOR_FIELDS: Final = {
    LetterDirection.INCOMING: ("received_date", "receivedDate"),
    LetterDirection.OUTGOING: ("created_date", "createdDate"),
}


def _excluded_fields(direction: LetterDirection) -> tuple[str, ...]:
    if direction == LetterDirection.INCOMING:
        return OUTGOING_ONLY_FIELDS
    return INCOMING_ONLY_FIELDS


@dataclass(frozen=True)
class LetterCreate:
    """Input for creating a letter. Fields of the other register are ignored."""

    letter_number: str
    subject: str
    sender: str
    recipient: str
    processor: str
    letter_date: datetime | None = None
    letter_nature: LetterNature = LetterNature.BIASA
    note: str | None = None
    is_invitation: bool = False
    event_date: datetime | None = None
    event_time: str | None = None
    event_location: str | None = None
    event_notes: str | None = None
    disposition_method: DispositionMethod = DispositionMethod.MANUAL
    srikandi_disposition_number: str | None = None
    received_date: datetime | None = None
    disposition_target: DispositionTarget | None = None
    needs_follow_up: bool = False
    follow_up_deadline: datetime | None = None
    created_date: datetime | None = None
    execution_date: datetime | None = None
    classification_code: str | None = None
    serial_number: int | None = None
    security_class: SecurityClass = SecurityClass.BIASA

    def column_values(self, direction: LetterDirection) -> dict[str, Any]:
        """Values to persist for the given register."""
        excluded = _excluded_fields(direction)
        return {
            f.name: getattr(self, f.name) for f in fields(self) if f.name not in excluded
        }

    def schedule(self, direction: LetterDirection) -> LetterSchedule:
        attr, api_field = ANCHOR_FIELDS[direction]
        incoming = direction == LetterDirection.INCOMING
        return LetterSchedule(
            anchor_date=getattr(self, attr),
            anchor_field=api_field,
            is_invitation=self.is_invitation,
            event_date=self.event_date,
            needs_follow_up=self.needs_follow_up if incoming else False,
            follow_up_deadline=self.follow_up_deadline if incoming else None,
        )


@dataclass(frozen=True)
class LetterPatch:
    """Explicit update: UNSET fields are left alone, others replace the stored value.

    Required columns (letter_number, subject, parties, register date, flags,
    enums) never carry None; the request schema rejects an explicit null.
    """

    letter_number: Any = UNSET
    subject: Any = UNSET
    sender: Any = UNSET
    recipient: Any = UNSET
    processor: Any = UNSET
    letter_date: Any = UNSET
    letter_nature: Any = UNSET
    note: Any = UNSET
    is_invitation: Any = UNSET
    event_date: Any = UNSET
    event_time: Any = UNSET
    event_location: Any = UNSET
    event_notes: Any = UNSET
    disposition_method: Any = UNSET
    srikandi_disposition_number: Any = UNSET
    received_date: Any = UNSET
    disposition_target: Any = UNSET
    needs_follow_up: Any = UNSET
    follow_up_deadline: Any = UNSET
    created_date: Any = UNSET
    execution_date: Any = UNSET
    classification_code: Any = UNSET
    serial_number: Any = UNSET
    security_class: Any = UNSET

    def changes(self, direction: LetterDirection) -> dict[str, Any]:
        """Provided fields that exist on the given register."""
        excluded = _excluded_fields(direction)
        return {
            f.name: value
            for f in fields(self)
            if f.name not in excluded and (value := getattr(self, f.name)) is not UNSET
        }


@dataclass(frozen=True)
class AttachmentUpload:
    """An uploaded file as received from the client."""

    filename: str
    content_type: str | None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StoredFile:
    """Where an attachment was written: original name and storage-relative path."""

    file_name: str
    file_path: str


@dataclass(frozen=True)
class LetterListFilter:
    """Search term (letter number, subject, sender, recipient) and exact filters."""

    search: str | None = None
    letter_nature: LetterNature | None = None
    needs_follow_up: bool = False


@dataclass(frozen=True)
class LetterResult:
    """Letter read-model for both registers; the other register's fields are None."""

    direction: LetterDirection
    id: str
    user_id: str
    letter_number: str
    subject: str
    sender: str
    recipient: str
    processor: str
    letter_date: datetime | None
    letter_nature: LetterNature
    note: str | None
    is_invitation: bool
    event_date: datetime | None
    event_time: str | None
    event_location: str | None
    event_notes: str | None
    disposition_method: DispositionMethod
    srikandi_disposition_number: str | None
    file_name: str | None
    file_path: str | None
    created_at: datetime
    updated_at: datetime
    received_date: datetime | None = None
    disposition_target: DispositionTarget | None = None
    needs_follow_up: bool = False
    follow_up_deadline: datetime | None = None
    overdue_notified_at: datetime | None = None
    created_date: datetime | None = None
    execution_date: datetime | None = None
    classification_code: str | None = None
    serial_number: int | None = None
    security_class: SecurityClass | None = None
    user: UserSummary | None = None
    dispositions: tuple[DispositionResult, ...] = field(default_factory=tuple)

    @property
    def anchor_date(self) -> datetime | None:
        return getattr(self, ANCHOR_FIELDS[self.direction][0])

    @property
    def has_event(self) -> bool:
        """True when the letter should have a calendar event."""
        return self.is_invitation and self.event_date is not None

    def merged(self, changes: dict[str, Any]) -> LetterResult:
        """Final state of an update: this letter with the patch applied."""
        return replace(self, **changes)

    def schedule(self) -> LetterSchedule:
        incoming = self.direction == LetterDirection.INCOMING
        return LetterSchedule(
            anchor_date=self.anchor_date,
            anchor_field=ANCHOR_FIELDS[self.direction][1],
            is_invitation=self.is_invitation,
            event_date=self.event_date,
            needs_follow_up=self.needs_follow_up if incoming else False,
            follow_up_deadline=self.follow_up_deadline if incoming else None,
        )
