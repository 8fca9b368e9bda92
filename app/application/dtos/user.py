"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool


@dataclass(frozen=True)
class UserSummary:
    """Denormalized owner shown on letters: id, name, email."""

    id: str
    name: str
    email: str
