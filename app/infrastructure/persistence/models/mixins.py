"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, TimestampMixin, OwnedMixin, and the combined
RegistryModel used by every table in the registry.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class OwnedMixin:
    """Mixin for rows created by a user: user_id FK to app_user (RESTRICT on delete).

    Users who still own letters cannot be deleted; deactivate them instead.
    """

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("app_user.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )


class RegistryModel(CuidMixin, TimestampMixin):
    """Combined mixin: CUID + created_at/updated_at."""

    __abstract__ = True
