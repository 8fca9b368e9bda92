"""Disposition ORM model: one routing decision for an incoming letter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import DispositionTarget
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RegistryModel
from app.infrastructure.persistence.models.types import enum_column

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.letter import IncomingLetter
    from app.infrastructure.persistence.models.user import User


class Disposition(RegistryModel, Base):
    """Append-only routing history; the newest row per letter is the current disposition."""

    __tablename__ = "disposition"

    incoming_letter_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("incoming_letter.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    disposition_to: Mapped[DispositionTarget] = mapped_column(
        enum_column(DispositionTarget, "disposition_to"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_by_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        index=True,
    )

    incoming_letter: Mapped[IncomingLetter] = relationship(
        back_populates="dispositions", lazy="raise"
    )
    created_by: Mapped[User | None] = relationship(lazy="raise")
