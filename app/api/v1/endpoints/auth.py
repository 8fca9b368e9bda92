"""Auth API: login, registration and current user.

Uses only injected dependencies (get_user_repo, get_user_repo_for_write);
the JWT is created via infrastructure security.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUser, get_user_repo, get_user_repo_for_write
from app.core.limiter import limit_auth, limit_register
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import UserRepository
from app.infrastructure.security.jwt import create_user_token
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
):
    """Register a STAFF account (public endpoint). 409 when the email is taken."""
    user = await user_repo.create_user(
        email=body.email, name=body.name, password=body.password
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Authenticate with email and password; return a JWT and the user."""
    user = await user_repo.authenticate(email=body.email, password=body.password)
    if not user:
        raise AuthenticationException("Email atau password salah")
    token = create_user_token(user.id, user.role.value)
    return TokenResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Return the currently authenticated user. Requires Authorization: Bearer <token>."""
    return UserResponse.model_validate(current_user)
