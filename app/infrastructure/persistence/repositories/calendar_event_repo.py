"""Calendar event repository: letter-derived events and reminder queries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.calendar import (
    CalendarEventCard,
    CalendarEventData,
    CalendarEventResult,
    ReminderCandidate,
)
from app.domain.enums import EventType, LetterDirection
from app.infrastructure.persistence.models.calendar_event import CalendarEvent
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _event_to_result(e: CalendarEvent) -> CalendarEventResult:
    return CalendarEventResult(
        id=e.id,
        title=e.title,
        description=e.description,
        date=ensure_utc(e.date),
        time=e.time,
        location=e.location,
        type=EventType(e.type),
        notified_3_days=e.notified_3_days,
        notified_1_day=e.notified_1_day,
        incoming_letter_id=e.incoming_letter_id,
        outgoing_letter_id=e.outgoing_letter_id,
        user_id=e.user_id,
        created_at=e.created_at,
        updated_at=e.updated_at,
    )


def _event_to_card(e: CalendarEvent) -> CalendarEventCard:
    letter = e.incoming_letter if e.incoming_letter_id else e.outgoing_letter
    direction = (
        LetterDirection.INCOMING if e.incoming_letter_id else LetterDirection.OUTGOING
    )
    return CalendarEventCard(
        id=e.id,
        title=e.title,
        date=ensure_utc(e.date),
        time=e.time,
        location=e.location,
        description=e.description,
        type=direction,
        letter_number=letter.letter_number if letter else "",
        letter_subject=letter.subject if letter else e.title,
    )


def _letter_column(direction: LetterDirection) -> Any:
    if direction == LetterDirection.INCOMING:
        return CalendarEvent.incoming_letter_id
    return CalendarEvent.outgoing_letter_id


class CalendarEventRepository(BaseRepository[CalendarEvent]):
    """At most one event per letter (unique FK per register)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CalendarEvent)

    async def _get_for_letter(
        self, direction: LetterDirection, letter_id: str
    ) -> CalendarEvent | None:
        result = await self.db.execute(
            select(CalendarEvent).where(_letter_column(direction) == letter_id)
        )
        return result.scalar_one_or_none()

    async def get_for_letter(
        self, direction: LetterDirection, letter_id: str
    ) -> CalendarEventResult | None:
        row = await self._get_for_letter(direction, letter_id)
        return _event_to_result(row) if row else None

    async def create_event(
        self,
        direction: LetterDirection,
        letter_id: str,
        user_id: str,
        data: CalendarEventData,
    ) -> CalendarEventResult:
        row = CalendarEvent(
            title=data.title,
            description=data.description,
            date=data.date,
            time=data.time,
            location=data.location,
            type=data.type,
            notified_3_days=False,
            notified_1_day=False,
            user_id=user_id,
            incoming_letter_id=letter_id if direction == LetterDirection.INCOMING else None,
            outgoing_letter_id=letter_id if direction == LetterDirection.OUTGOING else None,
        )
        return _event_to_result(await self.create(row))

    async def update_event(
        self, event_id: str, values: dict[str, Any]
    ) -> CalendarEventResult | None:
        row = await self.get_by_id(event_id)
        if row is None:
            return None
        return _event_to_result(await self.apply(row, values))

    async def delete_for_letter(self, direction: LetterDirection, letter_id: str) -> bool:
        result = await self.db.execute(
            delete(CalendarEvent).where(_letter_column(direction) == letter_id)
        )
        return (result.rowcount or 0) > 0

    def _cards(self) -> Any:
        return select(CalendarEvent).options(
            selectinload(CalendarEvent.incoming_letter),
            selectinload(CalendarEvent.outgoing_letter),
        )

    async def list_between(self, start: datetime, end: datetime) -> list[CalendarEventCard]:
        """Events with start <= date <= end, ascending."""
        result = await self.db.execute(
            self._cards()
            .where(CalendarEvent.date >= start, CalendarEvent.date <= end)
            .order_by(CalendarEvent.date.asc(), CalendarEvent.id.asc())
        )
        return [_event_to_card(e) for e in result.scalars().all()]

    async def list_upcoming(self, now: datetime, limit: int) -> list[CalendarEventCard]:
        result = await self.db.execute(
            self._cards()
            .where(CalendarEvent.date >= now)
            .order_by(CalendarEvent.date.asc(), CalendarEvent.id.asc())
            .limit(limit)
        )
        return [_event_to_card(e) for e in result.scalars().all()]

    async def list_reminder_candidates(
        self, now: datetime, until: datetime
    ) -> list[ReminderCandidate]:
        """Events in [now, until] with at least one reminder not yet sent."""
        result = await self.db.execute(
            select(CalendarEvent)
            .options(selectinload(CalendarEvent.user))
            .where(
                CalendarEvent.date >= now,
                CalendarEvent.date <= until,
                or_(
                    CalendarEvent.notified_3_days.is_(False),
                    CalendarEvent.notified_1_day.is_(False),
                ),
            )
            .order_by(CalendarEvent.date.asc())
        )
        return [
            ReminderCandidate(
                event=_event_to_result(e),
                owner_email=e.user.email if e.user else None,
                owner_name=e.user.name if e.user else None,
            )
            for e in result.scalars().all()
        ]

    async def mark_notified(
        self,
        event_id: str,
        *,
        three_days: bool = False,
        one_day: bool = False,
    ) -> None:
        values: dict[str, Any] = {}
        if three_days:
            values["notified_3_days"] = True
        if one_day:
            values["notified_1_day"] = True
        if not values:
            return
        await self.db.execute(
            update(CalendarEvent)
            .where(CalendarEvent.id == event_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
