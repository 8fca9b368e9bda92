"""DTOs for notification use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.common import Pagination
from app.domain.enums import NotificationType


@dataclass(frozen=True)
class NotificationCreate:
    """Write-model for a notification. user_id None is a broadcast."""

    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    user_id: str | None = None
    calendar_event_id: str | None = None


@dataclass(frozen=True)
class NotificationResult:
    id: str
    title: str
    message: str
    type: NotificationType
    user_id: str | None
    calendar_event_id: str | None
    is_read: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NotificationPage:
    """Visible notifications for one viewer plus their unread count."""

    items: list[NotificationResult]
    pagination: Pagination
    unread_count: int
