"""User API schemas."""

from app.domain.enums import UserRole
from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """User response (no password)."""

    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool


class UserSummaryResponse(CamelModel):
    """Owner or author embedded in letters and dispositions."""

    id: str
    name: str
    email: str
