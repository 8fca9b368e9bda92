"""Calendar Event Projector: keeps a letter's derived calendar event in step with it.

A letter has an event exactly when it is an invitation with an event
date. Reminder flags start false on creation and are reset only when the
event's date or time changes, so edits to title, location or notes do not
re-send reminders already delivered.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.calendar import CalendarEventData, CalendarEventResult
from app.application.dtos.letter import LetterResult
from app.application.interfaces.repositories import ICalendarEventRepository
from app.domain.enums import EventType, LetterDirection
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def event_data_for(letter: LetterResult) -> CalendarEventData:
    """Event fields derived from an invitation letter (event_date must be set)."""
    assert letter.event_date is not None
    description = f"Surat No. {letter.letter_number}"
    if letter.event_notes:
        description = f"{description}\n{letter.event_notes}"
    return CalendarEventData(
        title=letter.subject,
        description=description,
        date=letter.event_date,
        time=letter.event_time,
        location=letter.event_location,
        type=EventType.MEETING,
    )


def _schedule_changed(event: CalendarEventResult, data: CalendarEventData) -> bool:
    return ensure_utc(event.date) != ensure_utc(data.date) or (event.time or None) != (
        data.time or None
    )


class CalendarEventProjector:
    """sync(letter) after every create/update; remove_for_letter on delete."""

    def __init__(self, event_repo: ICalendarEventRepository) -> None:
        self.event_repo = event_repo

    async def sync(self, letter: LetterResult) -> None:
        existing = await self.event_repo.get_for_letter(letter.direction, letter.id)
        if not letter.has_event:
            if existing is not None:
                await self.event_repo.delete_for_letter(letter.direction, letter.id)
                logger.info("Removed calendar event for %s letter %s", letter.direction.value, letter.id)
            return

        data = event_data_for(letter)
        if existing is None:
            await self.event_repo.create_event(letter.direction, letter.id, letter.user_id, data)
            logger.info("Created calendar event for %s letter %s", letter.direction.value, letter.id)
            return

        values: dict[str, Any] = {
            "title": data.title,
            "description": data.description,
            "date": data.date,
            "time": data.time,
            "location": data.location,
        }
        if _schedule_changed(existing, data):
            values["notified_3_days"] = False
            values["notified_1_day"] = False
        await self.event_repo.update_event(existing.id, values)

    async def remove_for_letter(self, direction: LetterDirection, letter_id: str) -> None:
        await self.event_repo.delete_for_letter(direction, letter_id)
