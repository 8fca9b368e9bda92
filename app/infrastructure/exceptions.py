"""Attachment storage errors.

Each carries error_code STORAGE_<OPERATION>_ERROR (STORAGE_NOT_FOUND for a
missing file) so the central handler can map it to 404 or 500.
"""

from app.domain.exceptions import RegistryException


class StorageException(RegistryException):
    """A storage operation on one attachment path failed."""

    def __init__(
        self,
        operation: str,
        file_path: str,
        reason: str | None = None,
        *,
        message: str | None = None,
        error_code: str | None = None,
    ) -> None:
        details = {"file_path": file_path, "operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            message or f"Storage {operation} failed for {file_path}",
            error_code or f"STORAGE_{operation.upper()}_ERROR",
            details,
        )
        self.operation = operation


class StorageNotFoundError(StorageException):
    def __init__(self, file_path: str) -> None:
        super().__init__(
            "download",
            file_path,
            message=f"File not found: {file_path}",
            error_code="STORAGE_NOT_FOUND",
        )


class StoragePermissionError(StorageException):
    """Path resolves outside the upload root."""

    def __init__(self, file_path: str) -> None:
        super().__init__("permission", file_path, "path escapes upload root")
