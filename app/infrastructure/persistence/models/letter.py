"""Incoming and outgoing letter ORM models.

Both registers share the columns in LetterColumnsMixin; each table has its
own letter_number unique constraint (numbers are unique per direction).
Dispositions and the derived calendar event are deleted with the letter
(ON DELETE CASCADE plus ORM cascade).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from app.domain.enums import (
    DispositionMethod,
    DispositionTarget,
    LetterNature,
    SecurityClass,
)
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OwnedMixin, RegistryModel
from app.infrastructure.persistence.models.types import enum_column

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.calendar_event import CalendarEvent
    from app.infrastructure.persistence.models.disposition import Disposition
    from app.infrastructure.persistence.models.user import User


class LetterColumnsMixin(OwnedMixin):
    """Columns common to both registers."""

    letter_number: Mapped[str] = mapped_column(String(50), nullable=False)
    letter_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    letter_nature: Mapped[LetterNature] = mapped_column(
        enum_column(LetterNature, "letter_nature"),
        nullable=False,
        server_default=LetterNature.BIASA.value,
        index=True,
    )
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    sender: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient: Mapped[str] = mapped_column(String(100), nullable=False)
    processor: Mapped[str] = mapped_column(String(100), nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    is_invitation: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    event_time: Mapped[str | None] = mapped_column(String(20))
    event_location: Mapped[str | None] = mapped_column(String(200))
    event_notes: Mapped[str | None] = mapped_column(Text)

    disposition_method: Mapped[DispositionMethod] = mapped_column(
        enum_column(DispositionMethod, "disposition_method"),
        nullable=False,
        server_default=DispositionMethod.MANUAL.value,
    )
    srikandi_disposition_number: Mapped[str | None] = mapped_column(String(100))

    file_name: Mapped[str | None] = mapped_column(String(255))
    file_path: Mapped[str | None] = mapped_column(String(500))

    @declared_attr
    def user(cls) -> Mapped[User]:
        return relationship("User", lazy="raise")


class IncomingLetter(LetterColumnsMixin, RegistryModel, Base):
    """Surat masuk. Table: incoming_letter."""

    __tablename__ = "incoming_letter"

    received_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    disposition_target: Mapped[DispositionTarget | None] = mapped_column(
        enum_column(DispositionTarget, "disposition_target")
    )
    needs_follow_up: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    follow_up_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    overdue_notified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    dispositions: Mapped[list[Disposition]] = relationship(
        back_populates="incoming_letter",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    calendar_event: Mapped[CalendarEvent | None] = relationship(
        back_populates="incoming_letter",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("letter_number", name="uq_incoming_letter_number"),
    )


class OutgoingLetter(LetterColumnsMixin, RegistryModel, Base):
    """Surat keluar. Table: outgoing_letter."""

    __tablename__ = "outgoing_letter"

    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    execution_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    classification_code: Mapped[str | None] = mapped_column(String(50))
    serial_number: Mapped[int | None] = mapped_column(Integer)
    security_class: Mapped[SecurityClass] = mapped_column(
        enum_column(SecurityClass, "security_class"),
        nullable=False,
        server_default=SecurityClass.BIASA.value,
    )

    calendar_event: Mapped[CalendarEvent | None] = relationship(
        back_populates="outgoing_letter",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("letter_number", name="uq_outgoing_letter_number"),
    )
