"""Notification API schemas."""

from datetime import datetime

from app.domain.enums import NotificationType
from app.schemas.common import CamelModel, PaginationResponse


class NotificationResponse(CamelModel):
    id: str
    title: str
    message: str
    type: NotificationType
    user_id: str | None
    calendar_event_id: str | None
    is_read: bool
    created_at: datetime
    updated_at: datetime


class NotificationListResponse(CamelModel):
    """Visible notifications (own and broadcast) and the viewer's unread count."""

    items: list[NotificationResponse]
    pagination: PaginationResponse
    unread_count: int


class MarkAllReadResponse(CamelModel):
    updated: int
