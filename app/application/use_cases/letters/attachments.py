"""Attachment rules for letters: allowed types, size cap and stored file names."""

from __future__ import annotations

import os
import re
from datetime import datetime
from typing import Final

from app.application.dtos.letter import AttachmentUpload
from app.domain.enums import LetterDirection
from app.domain.exceptions import ValidationException
from app.shared.utils.generators import generate_file_suffix

ALLOWED_EXTENSIONS: Final = frozenset({"pdf", "doc", "docx", "jpg", "jpeg", "png"})
ALLOWED_MIME_TYPES: Final = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "image/jpeg",
        "image/png",
    }
)
ATTACHMENT_FIELD: Final = "file"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lstrip(".").lower()


def validate_attachment(upload: AttachmentUpload, max_size: int) -> None:
    """Raise ValidationException on field 'file' for empty, oversized or disallowed uploads."""
    if not upload.filename:
        raise ValidationException("Nama file tidak valid", field=ATTACHMENT_FIELD)
    if upload.size == 0:
        raise ValidationException("File kosong", field=ATTACHMENT_FIELD)
    if upload.size > max_size:
        limit_mb = max_size // (1024 * 1024)
        raise ValidationException(
            f"Ukuran file maksimal {limit_mb}MB", field=ATTACHMENT_FIELD
        )
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if (
        _extension(upload.filename) not in ALLOWED_EXTENSIONS
        or content_type not in ALLOWED_MIME_TYPES
    ):
        raise ValidationException(
            "Hanya file PDF, DOC, DOCX, JPG, JPEG, dan PNG yang diperbolehkan",
            field=ATTACHMENT_FIELD,
        )


def sanitize_filename(filename: str) -> str:
    """Base name with every character outside [a-zA-Z0-9.-] replaced by '_'."""
    name = os.path.basename(filename.replace("\\", "/")).replace("\x00", "")
    return _UNSAFE_CHARS.sub("_", name) or "file"


def attachment_path(
    direction: LetterDirection,
    filename: str,
    now: datetime,
    suffix: int | None = None,
) -> str:
    """Storage-relative path: letters/{direction}/{direction}-{epochMillis}-{random}-{name}."""
    millis = int(now.timestamp() * 1000)
    random_part = generate_file_suffix() if suffix is None else suffix
    name = f"{direction.value}-{millis}-{random_part}-{sanitize_filename(filename)}"
    return f"letters/{direction.value}/{name}"
