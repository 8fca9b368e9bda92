"""Attachment download response shared by the letter routers."""

import mimetypes
from collections.abc import AsyncIterator
from urllib.parse import quote

from fastapi.responses import StreamingResponse

from app.application.dtos.letter import LetterResult


def attachment_response(letter: LetterResult, chunks: AsyncIterator[bytes]) -> StreamingResponse:
    """Stream the file under its original name."""
    name = letter.file_name or "attachment"
    media_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return StreamingResponse(
        chunks,
        media_type=media_type,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(name)}"},
    )
