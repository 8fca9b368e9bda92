"""Attachment storage: local filesystem backend implementing ILetterFileStorage."""

from app.infrastructure.external.storage.factory import (
    create_letter_storage,
    get_letter_storage,
)
from app.infrastructure.external.storage.local_storage import LocalLetterStorage

__all__ = [
    "LocalLetterStorage",
    "create_letter_storage",
    "get_letter_storage",
]
