"""Disposition API: route incoming letters to departments and manage the history.

The newest disposition of a letter is its current routing; earlier rows
are kept as history. Edit and delete are limited to the author or an ADMIN.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import (
    CurrentUser,
    get_disposition_router,
    get_disposition_router_for_write,
)
from app.application.dtos.common import PageRequest
from app.application.use_cases.dispositions import DispositionRouter
from app.core.limiter import limit_writes
from app.schemas.disposition import (
    DispositionCreateForLetterRequest,
    DispositionCreateRequest,
    DispositionListResponse,
    DispositionResponse,
    DispositionUpdateRequest,
)

router = APIRouter()
letter_router = APIRouter()

Dispositions = Annotated[DispositionRouter, Depends(get_disposition_router)]
DispositionWrites = Annotated[DispositionRouter, Depends(get_disposition_router_for_write)]


@letter_router.post(
    "/{letter_id}/dispositions", response_model=DispositionResponse, status_code=201
)
@limit_writes
async def route_letter(
    request: Request,
    letter_id: str,
    body: DispositionCreateRequest,
    current_user: CurrentUser,
    dispositions: DispositionWrites,
):
    """Record a routing decision for the incoming letter (404 when it does not exist)."""
    disposition = await dispositions.route(
        letter_id, body.disposition_to, body.notes, current_user.id
    )
    return DispositionResponse.model_validate(disposition)


@router.post("", response_model=DispositionResponse, status_code=201)
@limit_writes
async def create_disposition(
    request: Request,
    body: DispositionCreateForLetterRequest,
    current_user: CurrentUser,
    dispositions: DispositionWrites,
):
    disposition = await dispositions.route(
        body.incoming_letter_id, body.disposition_to, body.notes, current_user.id
    )
    return DispositionResponse.model_validate(disposition)


@router.get("", response_model=DispositionListResponse)
async def list_dispositions(
    current_user: CurrentUser,
    dispositions: Dispositions,
    page: int = 1,
    limit: int = 10,
):
    """Dispositions across all letters, newest first, with the routed letter."""
    result = await dispositions.list_all(PageRequest.of(page, limit))
    return DispositionListResponse.model_validate(result)


@router.get("/letter/{letter_id}", response_model=list[DispositionResponse])
async def list_letter_dispositions(
    letter_id: str,
    current_user: CurrentUser,
    dispositions: Dispositions,
):
    """Routing history of a letter, newest first."""
    history = await dispositions.list_by_letter(letter_id)
    return [DispositionResponse.model_validate(d) for d in history]


@router.get("/{disposition_id}", response_model=DispositionResponse)
async def get_disposition(
    disposition_id: str,
    current_user: CurrentUser,
    dispositions: Dispositions,
):
    disposition = await dispositions.get(disposition_id)
    return DispositionResponse.model_validate(disposition)


@router.put("/{disposition_id}", response_model=DispositionResponse)
@limit_writes
async def update_disposition(
    request: Request,
    disposition_id: str,
    body: DispositionUpdateRequest,
    current_user: CurrentUser,
    dispositions: DispositionWrites,
):
    changes: dict[str, Any] = {}
    if "disposition_to" in body.model_fields_set:
        changes["target"] = body.disposition_to
    if "notes" in body.model_fields_set:
        changes["notes"] = body.notes
    disposition = await dispositions.update(
        disposition_id, current_user.id, current_user.role, **changes
    )
    return DispositionResponse.model_validate(disposition)


@router.delete("/{disposition_id}", status_code=204)
@limit_writes
async def delete_disposition(
    request: Request,
    disposition_id: str,
    current_user: CurrentUser,
    dispositions: DispositionWrites,
):
    await dispositions.delete(disposition_id, current_user.id, current_user.role)
    return Response(status_code=204)
