"""Surat keluar API: create, list, get, update, delete and attachment download.

Create and update accept multipart/form-data (attachment in field "file")
or JSON. Update and delete are limited to the letter owner or an ADMIN.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request, Response

from app.api.v1.dependencies import CurrentUser, OutgoingLetters, LetterPayload
from app.api.v1.endpoints._attachments import attachment_response
from app.application.dtos.common import PageRequest
from app.application.dtos.letter import LetterListFilter
from app.core.limiter import limit_upload, limit_writes
from app.domain.enums import LetterNature
from app.schemas.common import parse_input
from app.schemas.letter import (
    OutgoingLetterCreate,
    OutgoingLetterListResponse,
    OutgoingLetterResponse,
    OutgoingLetterUpdate,
)

router = APIRouter()


@router.post("", response_model=OutgoingLetterResponse, status_code=201)
@limit_upload
async def create_outgoing_letter(
    request: Request,
    current_user: CurrentUser,
    payload: LetterPayload,
    service: OutgoingLetters,
):
    data, upload = payload
    body = parse_input(OutgoingLetterCreate, data)
    letter = await service.create_letter(body.to_create(), current_user.id, upload)
    return OutgoingLetterResponse.model_validate(letter)


@router.get("", response_model=OutgoingLetterListResponse)
async def list_outgoing_letters(
    current_user: CurrentUser,
    service: OutgoingLetters,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    letter_nature: Annotated[LetterNature | None, Query(alias="letterNature")] = None,
):
    """Paginated list, newest first; search matches number, subject, sender or recipient."""
    filters = LetterListFilter(search=search, letter_nature=letter_nature)
    result = await service.list_letters(filters, PageRequest.of(page, limit))
    return OutgoingLetterListResponse.model_validate(result)


@router.get("/{letter_id}", response_model=OutgoingLetterResponse)
async def get_outgoing_letter(
    letter_id: str,
    current_user: CurrentUser,
    service: OutgoingLetters,
):
    letter = await service.get_letter(letter_id)
    return OutgoingLetterResponse.model_validate(letter)


@router.put("/{letter_id}", response_model=OutgoingLetterResponse)
@limit_upload
async def update_outgoing_letter(
    request: Request,
    letter_id: str,
    current_user: CurrentUser,
    payload: LetterPayload,
    service: OutgoingLetters,
):
    """Partial update; fields not submitted keep their stored value."""
    data, upload = payload
    body = parse_input(OutgoingLetterUpdate, data)
    letter = await service.update_letter(
        letter_id, body.to_patch(), current_user.id, current_user.role, upload
    )
    return OutgoingLetterResponse.model_validate(letter)


@router.delete("/{letter_id}", status_code=204)
@limit_writes
async def delete_outgoing_letter(
    request: Request,
    letter_id: str,
    current_user: CurrentUser,
    service: OutgoingLetters,
):
    await service.delete_letter(letter_id, current_user.id, current_user.role)
    return Response(status_code=204)


@router.get("/{letter_id}/file")
async def download_outgoing_letter_file(
    letter_id: str,
    current_user: CurrentUser,
    service: OutgoingLetters,
):
    """Stream the attachment; 404 when the letter has none."""
    letter, chunks = await service.open_attachment(letter_id)
    return attachment_response(letter, chunks)
