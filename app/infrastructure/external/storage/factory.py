"""Storage factory: creates the attachment store from settings."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from app.application.interfaces.services import ILetterFileStorage
from app.infrastructure.external.storage.local_storage import LocalLetterStorage

if TYPE_CHECKING:
    from app.core.config import Settings


def create_letter_storage(settings: Settings) -> ILetterFileStorage:
    """Local disk store rooted at UPLOAD_ROOT."""
    if not settings.upload_root:
        raise ValueError("UPLOAD_ROOT is required for attachment storage")
    return LocalLetterStorage(upload_root=settings.upload_root)


@lru_cache
def get_letter_storage() -> ILetterFileStorage:
    """Process-wide attachment store (stateless; cached to avoid repeated mkdir)."""
    from app.core.config import get_settings

    return create_letter_storage(get_settings())
