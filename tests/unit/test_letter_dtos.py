"""Pagination and letter DTO behaviour."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.common import Page, PageRequest, Pagination
from app.application.dtos.letter import UNSET, LetterPatch
from app.domain.enums import LetterDirection
from tests.factories import invitation, letter_create, letter_result


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, (1, 10)),
        (0, 0, (1, 1)),
        (3, 500, (3, 100)),
        (-2, 25, (1, 25)),
    ],
)
def test_page_request_normalizes(page, limit, expected) -> None:
    request = PageRequest.of(page, limit)
    assert (request.page, request.limit) == expected


def test_page_request_offset() -> None:
    assert PageRequest.of(3, 20).offset == 40


def test_pagination_rounds_pages_up() -> None:
    pagination = Pagination.build(PageRequest.of(2, 10), 21)
    assert pagination == Pagination(current=2, limit=10, total=21, pages=3)


def test_pagination_empty_result_has_zero_pages() -> None:
    page = Page(items=[], pagination=Pagination.build(PageRequest.of(1, 10), 0))
    assert page.pagination.pages == 0


def test_column_values_drop_other_register_fields() -> None:
    data = letter_create()
    incoming = data.column_values(LetterDirection.INCOMING)
    outgoing = data.column_values(LetterDirection.OUTGOING)
    assert "received_date" in incoming and "created_date" not in incoming
    assert "created_date" in outgoing and "needs_follow_up" not in outgoing


def test_outgoing_schedule_ignores_follow_up() -> None:
    data = letter_create(needs_follow_up=True)
    assert data.schedule(LetterDirection.INCOMING).needs_follow_up is True
    schedule = data.schedule(LetterDirection.OUTGOING)
    assert schedule.needs_follow_up is False
    assert schedule.anchor_field == "createdDate"


def test_patch_changes_only_provided_fields() -> None:
    patch = LetterPatch(subject="Perihal Baru", note=None)
    assert patch.changes(LetterDirection.INCOMING) == {
        "subject": "Perihal Baru",
        "note": None,
    }
    assert patch.letter_number is UNSET


def test_patch_drops_fields_of_other_register() -> None:
    patch = LetterPatch(created_date=datetime(2024, 1, 1, tzinfo=UTC))
    assert patch.changes(LetterDirection.INCOMING) == {}


def test_merged_state_drives_rules() -> None:
    stored = invitation()
    merged = stored.merged({"is_invitation": False})
    assert stored.has_event is True
    assert merged.has_event is False
    assert merged.schedule().anchor_field == "receivedDate"


def test_has_event_needs_a_date() -> None:
    assert letter_result(is_invitation=True).has_event is False
