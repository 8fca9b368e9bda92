"""Calendar use cases: event projection from letters and calendar queries."""

from app.application.use_cases.calendar.calendar_queries import CalendarQueryService
from app.application.use_cases.calendar.event_projector import (
    CalendarEventProjector,
    event_data_for,
)

__all__ = ["CalendarEventProjector", "CalendarQueryService", "event_data_for"]
