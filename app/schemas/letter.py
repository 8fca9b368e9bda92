"""Letter API schemas: create/update input per register and responses.

Inputs arrive as JSON or multipart form fields, so blank strings are read
as "not given" and flags accept the usual form spellings. Cross-field rules
(invitation, follow-up) are checked by the letter service on the final
state, not here.
"""

import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, Field, ValidationInfo, field_validator, model_validator

from app.application.dtos.letter import LetterCreate, LetterPatch
from app.domain.enums import (
    DispositionMethod,
    DispositionTarget,
    LetterNature,
    SecurityClass,
)
from app.schemas.common import CamelModel, PaginationResponse
from app.schemas.disposition import DispositionResponse
from app.schemas.user import UserSummaryResponse
from app.shared.utils.datetime import ensure_utc, utc_now

LETTER_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9\-/.]+$")

# field: (label, min length, max length); values are trimmed first.
_TEXT_LIMITS: dict[str, tuple[str, int, int]] = {
    "letter_number": ("Nomor surat", 3, 50),
    "subject": ("Subjek", 5, 200),
    "sender": ("Nama pengirim", 2, 100),
    "recipient": ("Nama penerima", 2, 100),
    "processor": ("Nama pengolah", 2, 100),
    "note": ("Keterangan", 0, 1000),
    "event_time": ("Waktu acara", 0, 20),
    "event_location": ("Lokasi acara", 0, 200),
    "event_notes": ("Catatan acara", 0, 1000),
    "srikandi_disposition_number": ("Nomor disposisi Srikandi", 0, 100),
    "classification_code": ("Kode klasifikasi", 0, 50),
}
_FLAG_FIELDS = frozenset({"is_invitation", "needs_follow_up"})
_FUTURE_MESSAGES = {
    "received_date": "Tanggal diterima tidak boleh di masa depan",
    "created_date": "Tanggal surat tidak boleh di masa depan",
}
_NOT_NULLABLE = (
    "letter_number",
    "subject",
    "sender",
    "recipient",
    "processor",
    "letter_nature",
    "is_invitation",
    "disposition_method",
    "received_date",
    "needs_follow_up",
    "created_date",
    "security_class",
)

Timestamp = Annotated[datetime, AfterValidator(ensure_utc)]


class _LetterInput(CamelModel):
    """Normalization and field checks shared by create and update inputs."""

    @model_validator(mode="before")
    @classmethod
    def _blank_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for name, field in cls.model_fields.items():
            if _TEXT_LIMITS.get(name, ("", 0, 0))[1] > 0:
                continue
            for key in {name, field.alias or name}:
                value = cleaned.get(key)
                if isinstance(value, str) and not value.strip():
                    cleaned[key] = False if name in _FLAG_FIELDS else None
        return cleaned

    @field_validator(*_TEXT_LIMITS, mode="before", check_fields=False)
    @classmethod
    def _check_text(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            return value
        label, min_length, max_length = _TEXT_LIMITS[info.field_name]
        value = value.strip()
        if len(value) < min_length:
            raise ValueError(f"{label} minimal {min_length} karakter")
        if len(value) > max_length:
            raise ValueError(f"{label} maksimal {max_length} karakter")
        if info.field_name == "letter_number" and not LETTER_NUMBER_PATTERN.match(value):
            raise ValueError(
                "Nomor surat hanya boleh berisi huruf, angka, tanda hubung, garis miring, dan titik"
            )
        return value

    @field_validator("received_date", "created_date", mode="after", check_fields=False)
    @classmethod
    def _not_in_future(cls, value: datetime | None, info: ValidationInfo) -> datetime | None:
        if value is not None and value > utc_now():
            raise ValueError(_FUTURE_MESSAGES[info.field_name])
        return value


class _LetterCreate(_LetterInput):
    letter_number: str
    subject: str
    sender: str
    recipient: str
    processor: str
    letter_date: Timestamp | None = None
    letter_nature: LetterNature = LetterNature.BIASA
    note: str | None = None
    is_invitation: bool = False
    event_date: Timestamp | None = None
    event_time: str | None = None
    event_location: str | None = None
    event_notes: str | None = None
    disposition_method: DispositionMethod = DispositionMethod.MANUAL
    srikandi_disposition_number: str | None = None

    def to_create(self) -> LetterCreate:
        return LetterCreate(**self.model_dump())


class IncomingLetterCreate(_LetterCreate):
    """Surat masuk input."""

    received_date: Timestamp
    disposition_target: DispositionTarget | None = None
    needs_follow_up: bool = False
    follow_up_deadline: Timestamp | None = None


class OutgoingLetterCreate(_LetterCreate):
    """Surat keluar input."""

    created_date: Timestamp
    execution_date: Timestamp | None = None
    classification_code: str | None = None
    serial_number: int | None = Field(default=None, ge=0)
    security_class: SecurityClass = SecurityClass.BIASA


class _LetterUpdate(_LetterInput):
    """Partial update: only submitted fields change; null clears optional ones."""

    letter_number: str | None = None
    subject: str | None = None
    sender: str | None = None
    recipient: str | None = None
    processor: str | None = None
    letter_date: Timestamp | None = None
    letter_nature: LetterNature | None = None
    note: str | None = None
    is_invitation: bool | None = None
    event_date: Timestamp | None = None
    event_time: str | None = None
    event_location: str | None = None
    event_notes: str | None = None
    disposition_method: DispositionMethod | None = None
    srikandi_disposition_number: str | None = None

    @field_validator(*_NOT_NULLABLE, mode="after", check_fields=False)
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field ini tidak boleh dikosongkan")
        return value

    def to_patch(self) -> LetterPatch:
        return LetterPatch(**self.model_dump(include=self.model_fields_set))


class IncomingLetterUpdate(_LetterUpdate):
    received_date: Timestamp | None = None
    disposition_target: DispositionTarget | None = None
    needs_follow_up: bool | None = None
    follow_up_deadline: Timestamp | None = None


class OutgoingLetterUpdate(_LetterUpdate):
    created_date: Timestamp | None = None
    execution_date: Timestamp | None = None
    classification_code: str | None = None
    serial_number: int | None = Field(default=None, ge=0)
    security_class: SecurityClass | None = None


class _LetterResponse(CamelModel):
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
    user: UserSummaryResponse | None = None


class IncomingLetterResponse(_LetterResponse):
    received_date: datetime
    disposition_target: DispositionTarget | None
    needs_follow_up: bool
    follow_up_deadline: datetime | None
    overdue_notified_at: datetime | None
    dispositions: list[DispositionResponse] = Field(default_factory=list)


class OutgoingLetterResponse(_LetterResponse):
    created_date: datetime
    execution_date: datetime | None
    classification_code: str | None
    serial_number: int | None
    security_class: SecurityClass


class IncomingLetterListResponse(CamelModel):
    items: list[IncomingLetterResponse]
    pagination: PaginationResponse


class OutgoingLetterListResponse(CamelModel):
    items: list[OutgoingLetterResponse]
    pagination: PaginationResponse
