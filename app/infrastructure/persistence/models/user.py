"""User ORM model for authentication and letter ownership."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import UserRole
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RegistryModel
from app.infrastructure.persistence.models.types import enum_column


class User(RegistryModel, Base):
    """User model. Table: app_user. Email is the login name and is unique."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole, "user_role"),
        nullable=False,
        server_default=UserRole.STAFF.value,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
