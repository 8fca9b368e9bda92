"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application use cases.
Use cases are built from infrastructure implementations here; routes depend
only on these dependencies, not on infrastructure directly.
"""

from app.api.v1.dependencies.auth import (
    CurrentUser,
    get_current_user,
    get_token_payload,
)
from app.api.v1.dependencies.db import get_db, get_db_transactional
from app.api.v1.dependencies.letters import (
    IncomingLetters,
    LetterPayload,
    OutgoingLetters,
    get_incoming_letter_service,
    get_outgoing_letter_service,
    read_letter_payload,
)
from app.api.v1.dependencies.registry import (
    get_calendar_query_service,
    get_disposition_router,
    get_disposition_router_for_write,
    get_notification_sink,
    get_notification_sink_for_write,
)
from app.api.v1.dependencies.users import get_user_repo, get_user_repo_for_write

__all__ = [
    "CurrentUser",
    "IncomingLetters",
    "LetterPayload",
    "OutgoingLetters",
    "get_calendar_query_service",
    "get_current_user",
    "get_db",
    "get_db_transactional",
    "get_disposition_router",
    "get_disposition_router_for_write",
    "get_incoming_letter_service",
    "get_notification_sink",
    "get_notification_sink_for_write",
    "get_outgoing_letter_service",
    "get_token_payload",
    "get_user_repo",
    "get_user_repo_for_write",
    "read_letter_payload",
]
