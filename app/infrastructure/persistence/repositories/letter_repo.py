"""Letter repositories for the incoming and outgoing registers.

Both registers share LetterRepository; subclasses bind the ORM model and
the register date used for ordering. Interface methods return
LetterResult DTOs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.common import PageRequest
from app.application.dtos.letter import LetterListFilter, LetterResult
from app.domain.enums import LetterDirection
from app.domain.exceptions import DuplicateLetterNumberException
from app.infrastructure.persistence.models.disposition import Disposition
from app.infrastructure.persistence.models.letter import IncomingLetter, OutgoingLetter
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.disposition_repo import (
    disposition_to_result,
)
from app.infrastructure.persistence.repositories.user_repo import user_to_summary
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

_SHARED_COLUMNS = (
    "letter_number",
    "subject",
    "sender",
    "recipient",
    "processor",
    "letter_date",
    "letter_nature",
    "note",
    "is_invitation",
    "event_date",
    "event_time",
    "event_location",
    "event_notes",
    "disposition_method",
    "srikandi_disposition_number",
    "file_name",
    "file_path",
)
_DATETIME_COLUMNS = frozenset(
    {
        "letter_date",
        "event_date",
        "received_date",
        "follow_up_deadline",
        "overdue_notified_at",
        "created_date",
        "execution_date",
    }
)


def _is_letter_number_violation(exc: IntegrityError) -> bool:
    return "letter_number" in str(exc.orig)


class LetterRepository[LetterModel: (IncomingLetter, OutgoingLetter)](
    BaseRepository[LetterModel]
):
    """Shared register operations. Nothing here commits."""

    direction: LetterDirection
    own_columns: tuple[str, ...] = ()
    load_dispositions: bool = False

    def __init__(self, db: AsyncSession, model: type[LetterModel]) -> None:
        super().__init__(db, model)

    @property
    def _order_column(self) -> Any:
        raise NotImplementedError

    def _to_result(self, row: LetterModel, *, with_dispositions: bool = False) -> LetterResult:
        values: dict[str, Any] = {
            name: getattr(row, name) for name in (*_SHARED_COLUMNS, *self.own_columns)
        }
        for name in _DATETIME_COLUMNS.intersection(values):
            values[name] = ensure_utc(values[name])
        dispositions: tuple = ()
        if with_dispositions and self.load_dispositions:
            ordered = sorted(
                row.dispositions, key=lambda d: (d.created_at, d.id), reverse=True
            )
            dispositions = tuple(disposition_to_result(d) for d in ordered)
        return LetterResult(
            direction=self.direction,
            id=row.id,
            user_id=row.user_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            user=user_to_summary(row.user),
            dispositions=dispositions,
            **values,
        )

    def _select(self, *, with_dispositions: bool = False) -> Any:
        model: Any = self.model
        stmt = select(self.model).options(selectinload(model.user))
        if with_dispositions and self.load_dispositions:
            stmt = stmt.options(
                selectinload(model.dispositions).selectinload(Disposition.created_by)
            )
        return stmt

    async def _load(self, letter_id: str, *, with_dispositions: bool = False) -> LetterModel | None:
        model: Any = self.model
        result = await self.db.execute(
            self._select(with_dispositions=with_dispositions)
            .where(model.id == letter_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_letter(
        self, letter_id: str, *, with_dispositions: bool = False
    ) -> LetterResult | None:
        row = await self._load(letter_id, with_dispositions=with_dispositions)
        if row is None:
            return None
        return self._to_result(row, with_dispositions=with_dispositions)

    async def letter_number_taken(
        self, letter_number: str, *, exclude_id: str | None = None
    ) -> bool:
        model: Any = self.model
        stmt = select(model.id).where(model.letter_number == letter_number)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def create_letter(self, values: dict[str, Any], user_id: str) -> LetterResult:
        """Insert a letter; DuplicateLetterNumberException on the unique constraint."""
        row = self.model(user_id=user_id, **values)
        try:
            await self.create(row)
        except IntegrityError as exc:
            if _is_letter_number_violation(exc):
                raise DuplicateLetterNumberException(
                    self.direction.value, values.get("letter_number", "")
                ) from exc
            raise
        loaded = await self._load(row.id)
        assert loaded is not None
        return self._to_result(loaded)

    async def update_letter(
        self, letter_id: str, changes: dict[str, Any]
    ) -> LetterResult | None:
        """Apply changes field by field; None when the letter does not exist."""
        row = await self._load(letter_id)
        if row is None:
            return None
        try:
            await self.apply(row, changes)
        except IntegrityError as exc:
            if _is_letter_number_violation(exc):
                raise DuplicateLetterNumberException(
                    self.direction.value, changes.get("letter_number", "")
                ) from exc
            raise
        loaded = await self._load(letter_id)
        assert loaded is not None
        return self._to_result(loaded)

    async def delete_letter(self, letter_id: str) -> bool:
        """Delete the row; dispositions and the calendar event go with it (ON DELETE CASCADE)."""
        return await self.delete_by_id(letter_id)

    def _filtered(self, stmt: Any, filters: LetterListFilter, now: datetime) -> Any:
        model: Any = self.model
        if filters.search:
            # Plain substring: % and _ in the term match themselves.
            term = filters.search.strip()
            stmt = stmt.where(
                or_(
                    *(
                        column.icontains(term, autoescape=True)
                        for column in (
                            model.letter_number,
                            model.subject,
                            model.sender,
                            model.recipient,
                        )
                    )
                )
            )
        if filters.letter_nature is not None:
            stmt = stmt.where(model.letter_nature == filters.letter_nature)
        return stmt

    async def list_letters(
        self, filters: LetterListFilter, page: PageRequest, now: datetime
    ) -> tuple[list[LetterResult], int]:
        """Return one page (register date, newest first) and the total match count."""
        model: Any = self.model
        count_stmt = self._filtered(select(func.count(model.id)), filters, now)
        total = (await self.db.execute(count_stmt)).scalar_one()
        stmt = (
            self._filtered(self._select(), filters, now)
            .order_by(self._order_column.desc(), model.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        rows = (await self.db.execute(stmt)).scalars().all()
        return [self._to_result(r) for r in rows], int(total)

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        """Letters recorded in [start, end)."""
        model: Any = self.model
        return await self.count(model.created_at >= start, model.created_at < end)


class IncomingLetterRepository(LetterRepository[IncomingLetter]):
    """Surat masuk register."""

    direction = LetterDirection.INCOMING
    own_columns = (
        "received_date",
        "disposition_target",
        "needs_follow_up",
        "follow_up_deadline",
        "overdue_notified_at",
    )
    load_dispositions = True

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, IncomingLetter)

    @property
    def _order_column(self) -> Any:
        return IncomingLetter.received_date

    def _filtered(self, stmt: Any, filters: LetterListFilter, now: datetime) -> Any:
        stmt = super()._filtered(stmt, filters, now)
        if filters.needs_follow_up:
            stmt = stmt.where(
                IncomingLetter.needs_follow_up.is_(True),
                IncomingLetter.follow_up_deadline >= now,
            )
        return stmt

    async def list_overdue_invitations(
        self, now: datetime, limit: int
    ) -> list[LetterResult]:
        """Invitations whose event has passed and were never reported, oldest event first."""
        stmt = (
            self._select()
            .where(
                IncomingLetter.is_invitation.is_(True),
                IncomingLetter.event_date.is_not(None),
                IncomingLetter.event_date < now,
                IncomingLetter.overdue_notified_at.is_(None),
            )
            .order_by(IncomingLetter.event_date.asc(), IncomingLetter.id.asc())
            .limit(limit)
        )
        rows = (await self.db.execute(stmt)).scalars().all()
        return [self._to_result(r) for r in rows]

    async def mark_overdue_notified(self, letter_ids: list[str], at: datetime) -> int:
        if not letter_ids:
            return 0
        result = await self.db.execute(
            update(IncomingLetter)
            .where(
                IncomingLetter.id.in_(letter_ids),
                IncomingLetter.overdue_notified_at.is_(None),
            )
            .values(overdue_notified_at=at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def list_follow_ups_due(
        self, start: datetime, end: datetime
    ) -> list[LetterResult]:
        """Letters needing follow-up with a deadline in [start, end)."""
        stmt = (
            self._select()
            .where(
                IncomingLetter.needs_follow_up.is_(True),
                IncomingLetter.follow_up_deadline >= start,
                IncomingLetter.follow_up_deadline < end,
            )
            .order_by(IncomingLetter.follow_up_deadline.asc())
        )
        rows = (await self.db.execute(stmt)).scalars().all()
        return [self._to_result(r) for r in rows]


class OutgoingLetterRepository(LetterRepository[OutgoingLetter]):
    """Surat keluar register."""

    direction = LetterDirection.OUTGOING
    own_columns = (
        "created_date",
        "execution_date",
        "classification_code",
        "serial_number",
        "security_class",
    )

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OutgoingLetter)

    @property
    def _order_column(self) -> Any:
        return OutgoingLetter.created_date
