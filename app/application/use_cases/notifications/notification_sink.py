"""Notification Sink: stores in-app notifications and serves them to viewers."""

from __future__ import annotations

from app.application.dtos.common import PageRequest, Pagination
from app.application.dtos.notification import (
    NotificationCreate,
    NotificationPage,
    NotificationResult,
)
from app.application.interfaces.repositories import INotificationRepository
from app.domain.exceptions import ResourceNotFoundException


class NotificationSink:
    """create / list / mark_read / mark_all_read. Read state only moves to True."""

    def __init__(self, notification_repo: INotificationRepository) -> None:
        self.notification_repo = notification_repo

    async def create(self, data: NotificationCreate) -> NotificationResult:
        return await self.notification_repo.create_notification(data)

    async def list_for(
        self, user_id: str, page: PageRequest, *, unread_only: bool = False
    ) -> NotificationPage:
        """Own and broadcast notifications, newest first, plus the unread count."""
        items, total = await self.notification_repo.list_visible(
            user_id, page, unread_only=unread_only
        )
        unread = await self.notification_repo.count_unread(user_id)
        return NotificationPage(
            items=items,
            pagination=Pagination.build(page, total),
            unread_count=unread,
        )

    async def mark_read(self, notification_id: str, user_id: str) -> None:
        """404 unless the notification is the viewer's own or a broadcast."""
        notification = await self.notification_repo.get_visible(notification_id, user_id)
        if notification is None:
            raise ResourceNotFoundException("notification", notification_id)
        if not notification.is_read:
            await self.notification_repo.mark_read(notification_id)

    async def mark_all_read(self, user_id: str) -> int:
        return await self.notification_repo.mark_all_read(user_id)
