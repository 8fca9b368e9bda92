"""Calendar queries: event cards for a date range and the next upcoming events."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from app.application.dtos.calendar import CalendarEventCard
from app.application.interfaces.repositories import ICalendarEventRepository
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import ensure_utc, utc_now

DEFAULT_RANGE = timedelta(days=30)
DEFAULT_UPCOMING_LIMIT = 10
MAX_UPCOMING_LIMIT = 100


class CalendarQueryService:
    def __init__(
        self,
        event_repo: ICalendarEventRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.event_repo = event_repo
        self.clock = clock

    async def events(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[CalendarEventCard]:
        """Events between start (default now) and end (default start + 30 days), ascending."""
        start = ensure_utc(start) if start is not None else self.clock()
        end = ensure_utc(end) if end is not None else start + DEFAULT_RANGE
        if end < start:
            raise ValidationException("end harus setelah start", field="end")
        return await self.event_repo.list_between(start, end)

    async def upcoming(self, limit: int | None = None) -> list[CalendarEventCard]:
        limit = DEFAULT_UPCOMING_LIMIT if limit is None else min(max(limit, 1), MAX_UPCOMING_LIMIT)
        return await self.event_repo.list_upcoming(self.clock(), limit)
