"""Letter business rules, independent of persistence and HTTP.

Cross-field rules are checked on the final state of a letter (for updates:
the stored row merged with the patch), so they live here rather than in the
request schemas, which only see the submitted fields.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import UserRole
from app.domain.exceptions import FieldError, ValidationException
from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class LetterSchedule:
    """The date fields the invitation and follow-up rules look at.

    anchor_date is receivedDate for incoming letters and createdDate for
    outgoing ones; anchor_field names it for error messages.
    """

    anchor_date: datetime | None
    anchor_field: str
    is_invitation: bool
    event_date: datetime | None
    needs_follow_up: bool = False
    follow_up_deadline: datetime | None = None


def letter_rule_errors(schedule: LetterSchedule) -> list[FieldError]:
    """Return cross-field violations; empty when the letter is consistent."""
    errors: list[FieldError] = []
    if schedule.is_invitation:
        if schedule.event_date is None:
            errors.append(
                FieldError("eventDate", "Tanggal acara wajib diisi untuk surat undangan")
            )
        elif schedule.anchor_date is not None and ensure_utc(
            schedule.event_date
        ) <= ensure_utc(schedule.anchor_date):
            errors.append(
                FieldError(
                    "eventDate",
                    f"Tanggal acara harus setelah {schedule.anchor_field}",
                )
            )
    if schedule.needs_follow_up and schedule.follow_up_deadline is None:
        errors.append(
            FieldError(
                "followUpDeadline",
                "Deadline tindak lanjut wajib diisi jika surat perlu tindak lanjut",
            )
        )
    return errors


def ensure_letter_rules(schedule: LetterSchedule) -> None:
    """Raise ValidationException listing every cross-field violation."""
    errors = letter_rule_errors(schedule)
    if errors:
        raise ValidationException("Data yang dimasukkan tidak valid", errors=errors)


def can_modify_letter(owner_id: str, actor_id: str, actor_role: UserRole | str) -> bool:
    """Owner or administrator may update or delete a letter."""
    return actor_id == owner_id or UserRole(actor_role) == UserRole.ADMIN
