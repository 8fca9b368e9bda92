"""Letter use cases: letter store operations and attachment rules."""

from app.application.use_cases.letters.attachments import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    attachment_path,
    sanitize_filename,
    validate_attachment,
)
from app.application.use_cases.letters.letter_operations import LetterService

__all__ = [
    "ALLOWED_EXTENSIONS",
    "ALLOWED_MIME_TYPES",
    "LetterService",
    "attachment_path",
    "sanitize_filename",
    "validate_attachment",
]
