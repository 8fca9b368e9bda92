"""Disposition Router: records which department an incoming letter is routed to.

Dispositions are an append-only history; the newest row is the letter's
current disposition. Editing changes the same row and does not add a
routing step.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.common import Page, PageRequest, Pagination
from app.application.dtos.disposition import DispositionResult
from app.application.dtos.letter import UNSET
from app.application.interfaces.repositories import IDispositionRepository
from app.domain.enums import DispositionTarget, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def parse_target(value: DispositionTarget | str) -> DispositionTarget:
    """Return the department code or raise ValidationException on dispositionTo."""
    try:
        return DispositionTarget(value)
    except ValueError as exc:
        raise ValidationException(
            f"Tujuan disposisi tidak valid: {value}. "
            f"Pilihan: {', '.join(DispositionTarget.values())}",
            field="dispositionTo",
        ) from exc


class DispositionRouter:
    """Route, list, edit and delete dispositions of incoming letters."""

    def __init__(self, disposition_repo: IDispositionRepository) -> None:
        self.disposition_repo = disposition_repo

    async def _require_letter(self, letter_id: str) -> None:
        if not await self.disposition_repo.letter_exists(letter_id):
            raise ResourceNotFoundException("incoming_letter", letter_id)

    async def _require(self, disposition_id: str) -> DispositionResult:
        disposition = await self.disposition_repo.get_disposition(disposition_id)
        if disposition is None:
            raise ResourceNotFoundException("disposition", disposition_id)
        return disposition

    @staticmethod
    def _authorize(
        disposition: DispositionResult, actor_id: str, actor_role: UserRole, action: str
    ) -> None:
        if UserRole(actor_role) == UserRole.ADMIN:
            return
        if disposition.created_by_id is None or disposition.created_by_id != actor_id:
            raise AuthorizationException(resource="disposition", action=action)

    async def route(
        self,
        letter_id: str,
        target: DispositionTarget | str,
        notes: str | None,
        actor_id: str,
    ) -> DispositionResult:
        """Append a routing decision to the letter's history."""
        department = parse_target(target)
        await self._require_letter(letter_id)
        disposition = await self.disposition_repo.create_disposition(
            letter_id, department, notes, actor_id
        )
        logger.info(
            "Letter %s routed to %s by user %s", letter_id, department.value, actor_id
        )
        return disposition

    async def get(self, disposition_id: str) -> DispositionResult:
        return await self._require(disposition_id)

    async def list_by_letter(self, letter_id: str) -> list[DispositionResult]:
        """History for the letter, newest first."""
        await self._require_letter(letter_id)
        return await self.disposition_repo.list_for_letter(letter_id)

    async def list_all(self, page: PageRequest) -> Page[DispositionResult]:
        """All dispositions across letters, newest first."""
        items, total = await self.disposition_repo.list_all(page)
        return Page(items=items, pagination=Pagination.build(page, total))

    async def update(
        self,
        disposition_id: str,
        actor_id: str,
        actor_role: UserRole,
        *,
        target: Any = UNSET,
        notes: Any = UNSET,
    ) -> DispositionResult:
        """Edit target and/or notes of an existing disposition (creator or admin)."""
        disposition = await self._require(disposition_id)
        self._authorize(disposition, actor_id, actor_role, "update")
        changes: dict[str, Any] = {}
        if target is not UNSET:
            changes["disposition_to"] = parse_target(target)
        if notes is not UNSET:
            changes["notes"] = notes
        updated = await self.disposition_repo.update_disposition(disposition_id, changes)
        if updated is None:
            raise ResourceNotFoundException("disposition", disposition_id)
        return updated

    async def delete(self, disposition_id: str, actor_id: str, actor_role: UserRole) -> None:
        disposition = await self._require(disposition_id)
        self._authorize(disposition, actor_id, actor_role, "delete")
        await self.disposition_repo.delete_disposition(disposition_id)
        logger.info("Disposition %s deleted by user %s", disposition_id, actor_id)
