"""Disposition, notification and calendar dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.calendar import CalendarQueryService
from app.application.use_cases.dispositions import DispositionRouter
from app.application.use_cases.notifications import NotificationSink
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    CalendarEventRepository,
    DispositionRepository,
    NotificationRepository,
)


async def get_disposition_router(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DispositionRouter:
    """Disposition reads."""
    return DispositionRouter(DispositionRepository(db))


async def get_disposition_router_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DispositionRouter:
    """Disposition writes (commit on success)."""
    return DispositionRouter(DispositionRepository(db))


async def get_notification_sink(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NotificationSink:
    return NotificationSink(NotificationRepository(db))


async def get_notification_sink_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> NotificationSink:
    return NotificationSink(NotificationRepository(db))


async def get_calendar_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CalendarQueryService:
    return CalendarQueryService(CalendarEventRepository(db))
