"""Letter service dependencies and request payload reading (composition root).

Letter writes use get_db (no automatic commit): LetterService commits
through the session itself so attachment files can be written before and
removed after the commit.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from app.application.dtos.letter import AttachmentUpload
from app.application.interfaces.repositories import ILetterRepository
from app.application.interfaces.services import ILetterFileStorage
from app.application.use_cases.calendar import CalendarEventProjector
from app.application.use_cases.letters import LetterService
from app.application.use_cases.notifications import NotificationSink
from app.core.config import get_settings
from app.domain.exceptions import ValidationException
from app.infrastructure.external.storage import get_letter_storage
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import (
    CalendarEventRepository,
    IncomingLetterRepository,
    NotificationRepository,
    OutgoingLetterRepository,
)

ATTACHMENT_FIELD = "file"
_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _build_letter_service(
    db: AsyncSession, letter_repo: ILetterRepository, storage: ILetterFileStorage
) -> LetterService:
    settings = get_settings()
    return LetterService(
        letter_repo=letter_repo,
        projector=CalendarEventProjector(CalendarEventRepository(db)),
        notifications=NotificationSink(NotificationRepository(db)),
        storage=storage,
        transaction=db,
        max_upload_size=settings.max_upload_size,
        timezone=settings.scheduler_timezone,
    )


async def get_incoming_letter_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[ILetterFileStorage, Depends(get_letter_storage)],
) -> LetterService:
    return _build_letter_service(db, IncomingLetterRepository(db), storage)


async def get_outgoing_letter_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[ILetterFileStorage, Depends(get_letter_storage)],
) -> LetterService:
    return _build_letter_service(db, OutgoingLetterRepository(db), storage)


async def read_letter_payload(
    request: Request,
) -> tuple[dict[str, Any], AttachmentUpload | None]:
    """Fields and optional attachment from a multipart/form or JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        data: dict[str, Any] = {}
        upload: AttachmentUpload | None = None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == ATTACHMENT_FIELD and value.filename:
                    upload = AttachmentUpload(
                        filename=value.filename,
                        content_type=value.content_type,
                        data=await value.read(),
                    )
                continue
            data[key] = value
        return data, upload
    try:
        body = await request.json()
    except ValueError:
        raise ValidationException("Request body must be JSON or form data", field="body") from None
    if not isinstance(body, dict):
        raise ValidationException("Request body must be an object", field="body")
    return body, None


LetterPayload = Annotated[
    tuple[dict[str, Any], AttachmentUpload | None], Depends(read_letter_payload)
]
IncomingLetters = Annotated[LetterService, Depends(get_incoming_letter_service)]
OutgoingLetters = Annotated[LetterService, Depends(get_outgoing_letter_service)]
