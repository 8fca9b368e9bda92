"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    calendar,
    dispositions,
    health,
    incoming_letters,
    notifications,
    outgoing_letters,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(
    incoming_letters.router, prefix="/incoming-letters", tags=["incoming-letters"]
)
api_router.include_router(
    dispositions.letter_router, prefix="/incoming-letters", tags=["dispositions"]
)
api_router.include_router(
    outgoing_letters.router, prefix="/outgoing-letters", tags=["outgoing-letters"]
)
api_router.include_router(dispositions.router, prefix="/dispositions", tags=["dispositions"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
