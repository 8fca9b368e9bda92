"""Pydantic request/response schemas for the API."""

from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.calendar import CalendarEventResponse
from app.schemas.common import CamelModel, PaginationResponse, parse_input
from app.schemas.disposition import (
    DispositionCreateForLetterRequest,
    DispositionCreateRequest,
    DispositionListResponse,
    DispositionResponse,
    DispositionUpdateRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.letter import (
    IncomingLetterCreate,
    IncomingLetterListResponse,
    IncomingLetterResponse,
    IncomingLetterUpdate,
    OutgoingLetterCreate,
    OutgoingLetterListResponse,
    OutgoingLetterResponse,
    OutgoingLetterUpdate,
)
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from app.schemas.user import UserResponse, UserSummaryResponse

__all__ = [
    "CalendarEventResponse",
    "CamelModel",
    "DispositionCreateForLetterRequest",
    "DispositionCreateRequest",
    "DispositionListResponse",
    "DispositionResponse",
    "DispositionUpdateRequest",
    "HealthResponse",
    "IncomingLetterCreate",
    "IncomingLetterListResponse",
    "IncomingLetterResponse",
    "IncomingLetterUpdate",
    "LoginRequest",
    "MarkAllReadResponse",
    "NotificationListResponse",
    "NotificationResponse",
    "OutgoingLetterCreate",
    "OutgoingLetterListResponse",
    "OutgoingLetterResponse",
    "OutgoingLetterUpdate",
    "PaginationResponse",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "UserSummaryResponse",
    "parse_input",
]
