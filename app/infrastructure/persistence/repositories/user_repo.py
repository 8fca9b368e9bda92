"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult, UserSummary
from app.domain.enums import UserRole
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import (
    hash_password_async,
    verify_password_async,
)

# Lazy dummy hash for constant-time comparison when the email is unknown.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await hash_password_async("not-a-real-password")
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        name=u.name,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


def user_to_summary(u: User | None) -> UserSummary | None:
    """Denormalized owner for letter and disposition read-models."""
    if u is None:
        return None
    return UserSummary(id=u.id, name=u.name, email=u.email)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate and create_user; emails are stored lowercased."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def get_user(self, user_id: str) -> UserResult | None:
        user = await self.get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        user = await self.get_by_email(email)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await verify_password_async(password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await verify_password_async(password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        email: str,
        name: str,
        password: str,
        role: UserRole = UserRole.STAFF,
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on unique constraint violation."""
        if await self.get_by_email(email) is not None:
            raise UserAlreadyExistsException()
        hashed = await hash_password_async(password)
        user = User(
            email=normalize_email(email),
            name=name.strip(),
            hashed_password=hashed,
            role=role,
            is_active=True,
        )
        try:
            created = await self.create(user)
        except IntegrityError as exc:
            raise UserAlreadyExistsException() from exc
        return _user_to_result(created)
