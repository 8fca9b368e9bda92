"""CalendarEvent ORM model: the event derived from an invitation letter."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import EventType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OwnedMixin, RegistryModel
from app.infrastructure.persistence.models.types import enum_column

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.letter import IncomingLetter, OutgoingLetter
    from app.infrastructure.persistence.models.user import User


class CalendarEvent(OwnedMixin, RegistryModel, Base):
    """Exactly one of incoming_letter_id / outgoing_letter_id is set; each is unique."""

    __tablename__ = "calendar_event"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    time: Mapped[str | None] = mapped_column(String(20))
    location: Mapped[str | None] = mapped_column(String(200))
    type: Mapped[EventType] = mapped_column(
        enum_column(EventType, "event_type"),
        nullable=False,
        server_default=EventType.MEETING.value,
    )
    notified_3_days: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    notified_1_day: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    incoming_letter_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("incoming_letter.id", ondelete="CASCADE"),
        unique=True,
    )
    outgoing_letter_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("outgoing_letter.id", ondelete="CASCADE"),
        unique=True,
    )

    incoming_letter: Mapped[IncomingLetter | None] = relationship(
        back_populates="calendar_event", lazy="raise"
    )
    outgoing_letter: Mapped[OutgoingLetter | None] = relationship(
        back_populates="calendar_event", lazy="raise"
    )
    user: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        CheckConstraint(
            "(incoming_letter_id IS NULL) <> (outgoing_letter_id IS NULL)",
            name="ck_calendar_event_one_letter",
        ),
    )
