"""Current-user dependencies (bearer JWT)."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies.users import get_user_repo
from app.application.dtos.user import UserResult
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import UserRepository
from app.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> dict[str, Any]:
    """Verified JWT claims; 401 when the header is missing or the token is invalid.

    Resolved before any database dependency so unauthenticated requests
    get 401 even when the database is unavailable.
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return verify_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None


async def get_current_user(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult:
    """Return the active user named by the token; raise 401 otherwise."""
    user = await user_repo.get_user(payload["sub"])
    if user is None or not user.is_active:
        raise AuthenticationException("User not found or inactive")
    return user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
