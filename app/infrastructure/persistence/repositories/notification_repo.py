"""Notification repository. A viewer sees their own rows and broadcasts (user_id NULL)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.common import PageRequest
from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.domain.enums import NotificationType
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.base import BaseRepository


def _notification_to_result(n: Notification) -> NotificationResult:
    return NotificationResult(
        id=n.id,
        title=n.title,
        message=n.message,
        type=NotificationType(n.type),
        user_id=n.user_id,
        calendar_event_id=n.calendar_event_id,
        is_read=n.is_read,
        created_at=n.created_at,
        updated_at=n.updated_at,
    )


def _visible_to(user_id: str) -> Any:
    return or_(Notification.user_id == user_id, Notification.user_id.is_(None))


class NotificationRepository(BaseRepository[Notification]):
    """Only is_read is ever updated, and only from False to True."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create_notification(self, data: NotificationCreate) -> NotificationResult:
        row = Notification(
            title=data.title,
            message=data.message,
            type=data.type,
            user_id=data.user_id,
            calendar_event_id=data.calendar_event_id,
            is_read=False,
        )
        return _notification_to_result(await self.create(row))

    async def get_visible(self, notification_id: str, user_id: str) -> NotificationResult | None:
        result = await self.db.execute(
            select(Notification).where(
                Notification.id == notification_id, _visible_to(user_id)
            )
        )
        row = result.scalar_one_or_none()
        return _notification_to_result(row) if row else None

    async def list_visible(
        self, user_id: str, page: PageRequest, *, unread_only: bool = False
    ) -> tuple[list[NotificationResult], int]:
        """Newest first, with the total count for the same filter."""
        conditions = [_visible_to(user_id)]
        if unread_only:
            conditions.append(Notification.is_read.is_(False))
        total = await self.count(*conditions)
        result = await self.db.execute(
            select(Notification)
            .where(*conditions)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        return [_notification_to_result(n) for n in result.scalars().all()], total

    async def count_unread(self, user_id: str) -> int:
        return await self.count(_visible_to(user_id), Notification.is_read.is_(False))

    async def mark_read(self, notification_id: str) -> None:
        await self.db.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )

    async def mark_all_read(self, user_id: str) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(_visible_to(user_id), Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
