"""Disposition repository. Interface methods return DispositionResult DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.common import PageRequest
from app.application.dtos.disposition import DispositionLetterSummary, DispositionResult
from app.application.dtos.user import UserSummary
from app.domain.enums import DispositionTarget
from app.infrastructure.persistence.models.disposition import Disposition
from app.infrastructure.persistence.models.letter import IncomingLetter
from app.infrastructure.persistence.repositories.base import BaseRepository


def disposition_to_result(
    d: Disposition, letter: IncomingLetter | None = None
) -> DispositionResult:
    """Map ORM Disposition (created_by loaded) to DispositionResult.

    Pass the loaded letter to embed its summary.
    """
    creator = d.created_by
    return DispositionResult(
        id=d.id,
        incoming_letter_id=d.incoming_letter_id,
        disposition_to=DispositionTarget(d.disposition_to),
        notes=d.notes,
        created_by_id=d.created_by_id,
        created_at=d.created_at,
        updated_at=d.updated_at,
        created_by=(
            UserSummary(id=creator.id, name=creator.name, email=creator.email)
            if creator is not None
            else None
        ),
        incoming_letter=(
            DispositionLetterSummary(
                id=letter.id,
                letter_number=letter.letter_number,
                subject=letter.subject,
                sender=letter.sender,
                received_date=letter.received_date,
            )
            if letter is not None
            else None
        ),
    )


class DispositionRepository(BaseRepository[Disposition]):
    """Append-only routing history per incoming letter."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Disposition)

    async def _load(self, disposition_id: str) -> Disposition | None:
        result = await self.db.execute(
            select(Disposition)
            .options(
                selectinload(Disposition.created_by),
                selectinload(Disposition.incoming_letter),
            )
            .where(Disposition.id == disposition_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def letter_exists(self, letter_id: str) -> bool:
        result = await self.db.execute(
            select(IncomingLetter.id).where(IncomingLetter.id == letter_id)
        )
        return result.scalar_one_or_none() is not None

    async def create_disposition(
        self,
        letter_id: str,
        target: DispositionTarget,
        notes: str | None,
        created_by_id: str | None,
    ) -> DispositionResult:
        row = Disposition(
            incoming_letter_id=letter_id,
            disposition_to=target,
            notes=notes,
            created_by_id=created_by_id,
        )
        await self.create(row)
        loaded = await self._load(row.id)
        assert loaded is not None
        return disposition_to_result(loaded, loaded.incoming_letter)

    async def get_disposition(self, disposition_id: str) -> DispositionResult | None:
        row = await self._load(disposition_id)
        return disposition_to_result(row, row.incoming_letter) if row else None

    async def list_for_letter(self, letter_id: str) -> list[DispositionResult]:
        """Newest first."""
        result = await self.db.execute(
            select(Disposition)
            .options(selectinload(Disposition.created_by))
            .where(Disposition.incoming_letter_id == letter_id)
            .order_by(Disposition.created_at.desc(), Disposition.id.desc())
        )
        return [disposition_to_result(d) for d in result.scalars().all()]

    async def list_all(self, page: PageRequest) -> tuple[list[DispositionResult], int]:
        """Every disposition across letters, newest first, with the letter summary."""
        total = await self.count()
        result = await self.db.execute(
            select(Disposition)
            .options(
                selectinload(Disposition.created_by),
                selectinload(Disposition.incoming_letter),
            )
            .order_by(Disposition.created_at.desc(), Disposition.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        return [
            disposition_to_result(d, d.incoming_letter) for d in result.scalars().all()
        ], total

    async def update_disposition(
        self, disposition_id: str, changes: dict[str, Any]
    ) -> DispositionResult | None:
        row = await self._load(disposition_id)
        if row is None:
            return None
        if changes:
            await self.apply(row, changes)
            row = await self._load(disposition_id)
            assert row is not None
        return disposition_to_result(row, row.incoming_letter)

    async def delete_disposition(self, disposition_id: str) -> bool:
        return await self.delete_by_id(disposition_id)
