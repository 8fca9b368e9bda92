"""Disposition API schemas.

dispositionTo is a plain string here; unknown department codes are
rejected by the disposition router with a 400 naming the field.
"""

from datetime import datetime

from pydantic import Field

from app.domain.enums import DispositionTarget
from app.schemas.common import CamelModel, PaginationResponse
from app.schemas.user import UserSummaryResponse


class DispositionCreateRequest(CamelModel):
    """Body for POST /incoming-letters/{id}/dispositions."""

    disposition_to: str = Field(..., min_length=1)
    notes: str | None = Field(default=None, max_length=1000)


class DispositionCreateForLetterRequest(DispositionCreateRequest):
    """Body for POST /dispositions (letter id in the body)."""

    incoming_letter_id: str = Field(..., min_length=1)


class DispositionUpdateRequest(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    disposition_to: str | None = Field(default=None, min_length=1)
    notes: str | None = Field(default=None, max_length=1000)


class DispositionLetterSummaryResponse(CamelModel):
    id: str
    letter_number: str
    subject: str
    sender: str
    received_date: datetime


class DispositionResponse(CamelModel):
    id: str
    incoming_letter_id: str
    disposition_to: DispositionTarget
    notes: str | None
    created_by_id: str | None
    created_at: datetime
    updated_at: datetime
    created_by: UserSummaryResponse | None = None
    incoming_letter: DispositionLetterSummaryResponse | None = None


class DispositionListResponse(CamelModel):
    """All dispositions across letters, newest first."""

    items: list[DispositionResponse]
    pagination: PaginationResponse
