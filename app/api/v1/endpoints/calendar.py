"""Calendar API: events derived from invitation letters."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import CurrentUser, get_calendar_query_service
from app.application.use_cases.calendar import CalendarQueryService
from app.schemas.calendar import CalendarEventResponse

router = APIRouter()

CalendarQueries = Annotated[CalendarQueryService, Depends(get_calendar_query_service)]


@router.get("/events", response_model=list[CalendarEventResponse])
async def list_calendar_events(
    current_user: CurrentUser,
    calendar: CalendarQueries,
    start: datetime | None = None,
    end: datetime | None = None,
):
    """Events between start and end (default: the next 30 days), ascending."""
    events = await calendar.events(start, end)
    return [CalendarEventResponse.model_validate(e) for e in events]


@router.get("/upcoming", response_model=list[CalendarEventResponse])
async def list_upcoming_events(
    current_user: CurrentUser,
    calendar: CalendarQueries,
    limit: int = 10,
):
    events = await calendar.upcoming(limit)
    return [CalendarEventResponse.model_validate(e) for e in events]
