"""Local filesystem storage for letter attachments with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageException,
    StorageNotFoundError,
    StoragePermissionError,
)


class LocalLetterStorage:
    """Attachments under upload_root (e.g. uploads/letters/incoming/...).

    Paths are validated against upload_root. Writes use temp file + rename.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, upload_root: str) -> None:
        self.upload_root = Path(upload_root).resolve()
        self.upload_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, file_path: str) -> Path:
        """Resolve and validate path under upload_root. Raises StoragePermissionError if traversal."""
        full_path = (self.upload_root / file_path).resolve()
        try:
            full_path.relative_to(self.upload_root)
        except ValueError as e:
            raise StoragePermissionError(file_path) from e
        return full_path

    async def write(self, file_path: str, data: bytes) -> None:
        """Write atomically (temp file in the target directory, then rename)."""
        target_path = self._get_full_path(file_path)
        try:
            await aiofiles.os.makedirs(target_path.parent, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                await aiofiles.os.replace(temp_path, target_path)
            finally:
                if await aiofiles.os.path.exists(temp_path):
                    await aiofiles.os.remove(temp_path)
        except OSError as e:
            raise StorageException("upload", file_path, str(e)) from e

    async def stream(self, file_path: str) -> AsyncIterator[bytes]:
        """Stream file content in CHUNK_SIZE pieces."""
        full_path = self._get_full_path(file_path)
        if not await aiofiles.os.path.isfile(full_path):
            raise StorageNotFoundError(file_path)
        try:
            async with aiofiles.open(full_path, "rb") as f:
                while True:
                    chunk = await f.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            raise StorageException("download", file_path, str(e)) from e

    async def delete(self, file_path: str) -> bool:
        """Delete file. Returns True if deleted, False if it was already gone."""
        full_path = self._get_full_path(file_path)
        try:
            await aiofiles.os.remove(full_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageException("delete", file_path, str(e)) from e
        return True

    async def exists(self, file_path: str) -> bool:
        try:
            return await aiofiles.os.path.isfile(self._get_full_path(file_path))
        except StoragePermissionError:
            return False
