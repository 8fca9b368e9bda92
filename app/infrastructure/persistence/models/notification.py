"""Notification ORM model (in-app notifications; user_id NULL is a broadcast)."""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import NotificationType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RegistryModel
from app.infrastructure.persistence.models.types import enum_column


class Notification(RegistryModel, Base):
    """Only is_read changes after creation."""

    __tablename__ = "notification"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[NotificationType] = mapped_column(
        enum_column(NotificationType, "notification_type"),
        nullable=False,
        server_default=NotificationType.INFO.value,
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE")
    )
    calendar_event_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("calendar_event.id", ondelete="SET NULL"),
        index=True,
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )

    __table_args__ = (
        Index("ix_notification_user_id_is_read", "user_id", "is_read"),
    )
