"""Calendar API schemas."""

from datetime import datetime

from app.domain.enums import LetterDirection
from app.schemas.common import CamelModel


class CalendarEventResponse(CamelModel):
    """Event card: type says which register the source letter is in."""

    id: str
    title: str
    date: datetime
    time: str | None
    location: str | None
    description: str | None
    type: LetterDirection
    letter_number: str
    letter_subject: str
