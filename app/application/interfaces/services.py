"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.letter import LetterResult
    from app.application.dtos.notification import NotificationCreate, NotificationResult
    from app.domain.enums import LetterDirection


# File storage for letter attachments
class ILetterFileStorage(Protocol):
    """Protocol for storing attachment bytes under storage-relative paths."""

    async def write(self, file_path: str, data: bytes) -> None:
        """Write the file atomically; raise a storage error on failure."""

    async def delete(self, file_path: str) -> bool:
        """Delete the file. Returns True if deleted, False if not found."""

    async def exists(self, file_path: str) -> bool:
        """Return True if the file exists."""

    def stream(self, file_path: str) -> AsyncIterator[bytes]:
        """Stream file content; raise StorageNotFoundError when missing."""


# Calendar event projector (letter -> derived event)
class ICalendarProjector(Protocol):
    async def sync(self, letter: LetterResult) -> None:
        """Create, update or delete the letter's event to match its invitation fields."""

    async def remove_for_letter(self, direction: LetterDirection, letter_id: str) -> None:
        """Delete the letter's event if present."""


# Notification sink (in-app notifications)
class INotificationSink(Protocol):
    async def create(self, data: NotificationCreate) -> NotificationResult:
        """Store a notification (user_id None = broadcast)."""


# Outbound email (best-effort)
class IMailer(Protocol):
    """Protocol for sending email. Never raises; failures are logged."""

    async def send(self, to_email: str, subject: str, html: str) -> bool:
        """Send one message. Returns True when the message was handed to the server."""


# Transaction boundary for use cases that order side effects around the commit
class ITransaction(Protocol):
    async def commit(self) -> None:
        """Commit pending work."""

    async def rollback(self) -> None:
        """Discard pending work."""
