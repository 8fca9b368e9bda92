"""Database session dependencies (re-exported for routers and tests)."""

from app.infrastructure.persistence.database import get_db, get_db_transactional

__all__ = ["get_db", "get_db_transactional"]
