"""JWT access tokens for API users.

Tokens carry sub (user id), role and iat; the current-user dependency
reloads the user from the database on every request, so role changes and
deactivation take effect immediately.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.enums import UserRole


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Encode claims with iat and exp (default ACCESS_TOKEN_EXPIRE_MINUTES)."""
    settings = get_settings()
    issued_at = datetime.now(UTC)
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "iat": issued_at, "exp": issued_at + ttl}
    return cast(
        str,
        jwt.encode(
            claims,
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        ),
    )


def create_user_token(user_id: str, role: str) -> str:
    """Access token for a logged-in user."""
    return create_access_token({"sub": user_id, "role": role})


def verify_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT; requires exp and a non-empty sub.

    A role claim, when present, must be one of the registry roles.

    Raises:
        ValueError: If the token is invalid, expired, or its claims are unusable.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    role = payload.get("role")
    if role is not None and role not in UserRole.values():
        raise ValueError(f"Token carries unknown role: {role}")
    return payload
