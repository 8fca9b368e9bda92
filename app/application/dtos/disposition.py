"""DTOs for disposition use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.user import UserSummary
from app.domain.enums import DispositionTarget


@dataclass(frozen=True)
class DispositionLetterSummary:
    """The routed letter as shown in the cross-letter disposition list."""

    id: str
    letter_number: str
    subject: str
    sender: str
    received_date: datetime


@dataclass(frozen=True)
class DispositionResult:
    """One routing decision. The newest row for a letter is its current disposition."""

    id: str
    incoming_letter_id: str
    disposition_to: DispositionTarget
    notes: str | None
    created_by_id: str | None
    created_at: datetime
    updated_at: datetime
    created_by: UserSummary | None = None
    incoming_letter: DispositionLetterSummary | None = None
