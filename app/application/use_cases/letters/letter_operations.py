"""Letter operations for one register: create, update, get, list, delete, attachment download.

Write operations commit through the injected transaction so attachment
files can be ordered around the commit: the new file is written before the
database write, removed again if the write or commit fails, and the
replaced file is removed only after the commit succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from datetime import datetime

from app.application.dtos.common import Page, PageRequest, Pagination
from app.application.dtos.letter import (
    AttachmentUpload,
    LetterCreate,
    LetterListFilter,
    LetterPatch,
    LetterResult,
    StoredFile,
)
from app.application.dtos.notification import NotificationCreate
from app.application.interfaces.repositories import ILetterRepository
from app.application.interfaces.services import (
    ICalendarProjector,
    ILetterFileStorage,
    INotificationSink,
    ITransaction,
)
from app.application.use_cases.letters.attachments import (
    attachment_path,
    validate_attachment,
)
from app.domain.entities.letter import can_modify_letter, ensure_letter_rules
from app.domain.enums import LetterDirection, NotificationType, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateLetterNumberException,
    ResourceNotFoundException,
)
from app.shared.utils.datetime import utc_now
from app.shared.utils.formatting import format_date_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024


class LetterService:
    """Letter Store for one register (incoming or outgoing)."""

    def __init__(
        self,
        letter_repo: ILetterRepository,
        projector: ICalendarProjector,
        notifications: INotificationSink,
        storage: ILetterFileStorage,
        transaction: ITransaction,
        *,
        max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE,
        timezone: str = "Asia/Jakarta",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.letter_repo = letter_repo
        self.projector = projector
        self.notifications = notifications
        self.storage = storage
        self.transaction = transaction
        self.max_upload_size = max_upload_size
        self.timezone = timezone
        self.clock = clock

    @property
    def direction(self) -> LetterDirection:
        return self.letter_repo.direction

    @property
    def _resource(self) -> str:
        return f"{self.direction.value}_letter"

    async def _require(self, letter_id: str, *, with_dispositions: bool = False) -> LetterResult:
        letter = await self.letter_repo.get_letter(
            letter_id, with_dispositions=with_dispositions
        )
        if letter is None:
            raise ResourceNotFoundException(self._resource, letter_id)
        return letter

    def _authorize(self, letter: LetterResult, actor_id: str, actor_role: UserRole, action: str) -> None:
        if not can_modify_letter(letter.user_id, actor_id, actor_role):
            raise AuthorizationException(resource=self._resource, action=action)

    async def _store_upload(self, upload: AttachmentUpload) -> StoredFile:
        path = attachment_path(self.direction, upload.filename, self.clock())
        await self.storage.write(path, upload.data)
        return StoredFile(file_name=upload.filename, file_path=path)

    async def _discard_file(self, file_path: str | None) -> None:
        """Best-effort removal; failures are logged and never raised."""
        if not file_path:
            return
        try:
            await self.storage.delete(file_path)
        except Exception:
            logger.warning("Failed to remove attachment %s", file_path, exc_info=True)

    async def _announce_new(self, letter: LetterResult) -> None:
        """Broadcast notifications for a newly recorded letter."""
        if letter.has_event and letter.event_date is not None:
            when = format_date_id(letter.event_date, self.timezone)
            await self.notifications.create(
                NotificationCreate(
                    title="Undangan Baru Diterima",
                    message=f'Anda memiliki undangan untuk acara "{letter.subject}" pada {when}',
                    type=NotificationType.INFO,
                )
            )
        if (
            self.direction == LetterDirection.INCOMING
            and letter.needs_follow_up
            and letter.follow_up_deadline is not None
        ):
            deadline = format_date_id(letter.follow_up_deadline, self.timezone)
            await self.notifications.create(
                NotificationCreate(
                    title="Surat Perlu Tindak Lanjut",
                    message=f'Surat "{letter.subject}" perlu ditindaklanjuti sebelum {deadline}',
                    type=NotificationType.WARNING,
                )
            )

    async def create_letter(
        self,
        data: LetterCreate,
        actor_id: str,
        upload: AttachmentUpload | None = None,
    ) -> LetterResult:
        """Validate, store the attachment, insert, project the event and commit."""
        if upload is not None:
            validate_attachment(upload, self.max_upload_size)
        ensure_letter_rules(data.schedule(self.direction))
        if await self.letter_repo.letter_number_taken(data.letter_number):
            raise DuplicateLetterNumberException(self.direction.value, data.letter_number)

        stored = await self._store_upload(upload) if upload is not None else None
        values = data.column_values(self.direction)
        if stored is not None:
            values["file_name"] = stored.file_name
            values["file_path"] = stored.file_path
        try:
            letter = await self.letter_repo.create_letter(values, actor_id)
            await self.projector.sync(letter)
            await self._announce_new(letter)
            await self.transaction.commit()
        except Exception:
            await self.transaction.rollback()
            await self._discard_file(stored.file_path if stored else None)
            raise
        logger.info(
            "Created %s letter %s (%s) by user %s",
            self.direction.value,
            letter.id,
            letter.letter_number,
            actor_id,
        )
        return letter

    async def update_letter(
        self,
        letter_id: str,
        patch: LetterPatch,
        actor_id: str,
        actor_role: UserRole,
        upload: AttachmentUpload | None = None,
    ) -> LetterResult:
        """Apply the patch on top of the stored letter; rules run on the merged state."""
        current = await self._require(letter_id)
        self._authorize(current, actor_id, actor_role, "update")
        if upload is not None:
            validate_attachment(upload, self.max_upload_size)

        changes = patch.changes(self.direction)
        ensure_letter_rules(current.merged(changes).schedule())
        new_number = changes.get("letter_number")
        if (
            new_number is not None
            and new_number != current.letter_number
            and await self.letter_repo.letter_number_taken(new_number, exclude_id=letter_id)
        ):
            raise DuplicateLetterNumberException(self.direction.value, new_number)

        stored = await self._store_upload(upload) if upload is not None else None
        if stored is not None:
            changes["file_name"] = stored.file_name
            changes["file_path"] = stored.file_path
        try:
            updated = await self.letter_repo.update_letter(letter_id, changes)
            if updated is None:
                raise ResourceNotFoundException(self._resource, letter_id)
            await self.projector.sync(updated)
            await self.transaction.commit()
        except Exception:
            await self.transaction.rollback()
            await self._discard_file(stored.file_path if stored else None)
            raise
        if stored is not None and current.file_path and current.file_path != stored.file_path:
            await self._discard_file(current.file_path)
        logger.info("Updated %s letter %s by user %s", self.direction.value, letter_id, actor_id)
        return updated

    async def get_letter(self, letter_id: str) -> LetterResult:
        """Letter with owner and (incoming) dispositions newest first."""
        return await self._require(letter_id, with_dispositions=True)

    async def list_letters(
        self, filters: LetterListFilter, page: PageRequest
    ) -> Page[LetterResult]:
        items, total = await self.letter_repo.list_letters(filters, page, self.clock())
        return Page(items=items, pagination=Pagination.build(page, total))

    async def delete_letter(self, letter_id: str, actor_id: str, actor_role: UserRole) -> None:
        """Delete the letter with its event and dispositions, then its file."""
        letter = await self._require(letter_id)
        self._authorize(letter, actor_id, actor_role, "delete")
        try:
            await self.projector.remove_for_letter(self.direction, letter_id)
            await self.letter_repo.delete_letter(letter_id)
            await self.transaction.commit()
        except Exception:
            await self.transaction.rollback()
            raise
        await self._discard_file(letter.file_path)
        logger.info("Deleted %s letter %s by user %s", self.direction.value, letter_id, actor_id)

    async def open_attachment(self, letter_id: str) -> tuple[LetterResult, AsyncIterator[bytes]]:
        """Return the letter and a byte stream of its attachment."""
        letter = await self._require(letter_id)
        if not letter.file_path or not await self.storage.exists(letter.file_path):
            raise ResourceNotFoundException("attachment", letter_id)
        return letter, self.storage.stream(letter.file_path)
