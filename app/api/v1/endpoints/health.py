"""Health check endpoint. Used for liveness and readiness probes."""

import logging

from fastapi import APIRouter
from sqlalchemy import text

from app.core.config import get_settings
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return ok plus database reachability (never fails the probe itself)."""
    settings = get_settings()
    if not settings.sql_configured:
        return HealthResponse(database="not_configured")

    from app.infrastructure.persistence.database import get_session_factory

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Health check: database unreachable", exc_info=True)
        return HealthResponse(database="error")
    return HealthResponse(database="ok")
