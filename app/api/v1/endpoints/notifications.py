"""Notification API: the viewer's own and broadcast notifications."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    CurrentUser,
    get_notification_sink,
    get_notification_sink_for_write,
)
from app.application.dtos.common import PageRequest
from app.application.use_cases.notifications import NotificationSink
from app.core.limiter import limit_writes
from app.schemas.notification import MarkAllReadResponse, NotificationListResponse

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: CurrentUser,
    sink: Annotated[NotificationSink, Depends(get_notification_sink)],
    page: int = 1,
    limit: int = 10,
    unread_only: Annotated[bool, Query(alias="unreadOnly")] = False,
):
    """Newest first, with the total unread count."""
    result = await sink.list_for(
        current_user.id, PageRequest.of(page, limit), unread_only=unread_only
    )
    return NotificationListResponse.model_validate(result)


@router.put("/read-all", response_model=MarkAllReadResponse)
@limit_writes
async def mark_all_notifications_read(
    request: Request,
    current_user: CurrentUser,
    sink: Annotated[NotificationSink, Depends(get_notification_sink_for_write)],
):
    updated = await sink.mark_all_read(current_user.id)
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", status_code=204)
@limit_writes
async def mark_notification_read(
    request: Request,
    notification_id: str,
    current_user: CurrentUser,
    sink: Annotated[NotificationSink, Depends(get_notification_sink_for_write)],
):
    """404 when the notification is neither the viewer's nor a broadcast."""
    await sink.mark_read(notification_id, current_user.id)
    return Response(status_code=204)
