"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (used by
Alembic autogenerate and test fixtures).
"""

from app.infrastructure.persistence.models.calendar_event import CalendarEvent
from app.infrastructure.persistence.models.disposition import Disposition
from app.infrastructure.persistence.models.letter import (
    IncomingLetter,
    LetterColumnsMixin,
    OutgoingLetter,
)
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OwnedMixin,
    RegistryModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CalendarEvent",
    "Disposition",
    "IncomingLetter",
    "LetterColumnsMixin",
    "Notification",
    "OutgoingLetter",
    "User",
    "CuidMixin",
    "OwnedMixin",
    "RegistryModel",
    "TimestampMixin",
]
