"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import CamelModel
from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Request body for public registration. New accounts are STAFF."""

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class TokenResponse(CamelModel):
    """JWT and the authenticated user."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
