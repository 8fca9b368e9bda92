"""CalendarEventProjector and CalendarQueryService with a mocked event repository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.calendar import (
    CalendarEventProjector,
    CalendarQueryService,
    event_data_for,
)
from app.domain.enums import EventType, LetterDirection
from app.domain.exceptions import ValidationException
from tests.factories import NOW, event_result, invitation, letter_result


@pytest.fixture
def event_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_for_letter = AsyncMock(return_value=None)
    return repo


def test_event_data_for_invitation() -> None:
    data = event_data_for(invitation(event_notes="Membawa laptop"))
    assert data.title == "Undangan Rapat Koordinasi"
    assert data.description == "Surat No. 001/SK/2024\nMembawa laptop"
    assert data.time == "09:00"
    assert data.location == "Aula"
    assert data.type == EventType.MEETING


async def test_sync_creates_event_for_new_invitation(event_repo: AsyncMock) -> None:
    letter = invitation(LetterDirection.OUTGOING)
    await CalendarEventProjector(event_repo).sync(letter)

    direction, letter_id, owner, data = event_repo.create_event.call_args.args
    assert (direction, letter_id, owner) == (LetterDirection.OUTGOING, "letter-1", "user-staff")
    assert data.description == "Surat No. 001/SK/2024"
    event_repo.update_event.assert_not_awaited()


async def test_sync_without_event_is_noop(event_repo: AsyncMock) -> None:
    await CalendarEventProjector(event_repo).sync(letter_result())
    event_repo.create_event.assert_not_awaited()
    event_repo.delete_for_letter.assert_not_awaited()


async def test_sync_removes_event_when_no_longer_invitation(event_repo: AsyncMock) -> None:
    event_repo.get_for_letter.return_value = event_result()
    await CalendarEventProjector(event_repo).sync(letter_result())
    event_repo.delete_for_letter.assert_awaited_once_with(LetterDirection.INCOMING, "letter-1")


async def test_sync_keeps_flags_when_only_location_changes(event_repo: AsyncMock) -> None:
    event_repo.get_for_letter.return_value = event_result(notified_3_days=True)
    await CalendarEventProjector(event_repo).sync(invitation(event_location="Ruang Rapat 2"))

    event_id, values = event_repo.update_event.call_args.args
    assert event_id == "event-1"
    assert values["location"] == "Ruang Rapat 2"
    assert "notified_3_days" not in values
    assert "notified_1_day" not in values


@pytest.mark.parametrize(
    "change",
    [
        {"event_date": datetime(2024, 1, 20, 2, 0, tzinfo=UTC)},
        {"event_time": "13:00"},
    ],
)
async def test_sync_resets_flags_when_schedule_changes(event_repo: AsyncMock, change) -> None:
    event_repo.get_for_letter.return_value = event_result(
        notified_3_days=True, notified_1_day=True
    )
    await CalendarEventProjector(event_repo).sync(invitation(**change))

    values = event_repo.update_event.call_args.args[1]
    assert values["notified_3_days"] is False
    assert values["notified_1_day"] is False


async def test_events_defaults_to_next_thirty_days(event_repo: AsyncMock) -> None:
    service = CalendarQueryService(event_repo, clock=lambda: NOW)
    await service.events()
    event_repo.list_between.assert_awaited_once_with(NOW, NOW + timedelta(days=30))


async def test_events_naive_bounds_read_as_utc(event_repo: AsyncMock) -> None:
    service = CalendarQueryService(event_repo, clock=lambda: NOW)
    await service.events(datetime(2024, 2, 1), datetime(2024, 2, 29))
    start, end = event_repo.list_between.call_args.args
    assert start == datetime(2024, 2, 1, tzinfo=UTC)
    assert end == datetime(2024, 2, 29, tzinfo=UTC)


async def test_events_end_before_start_rejected(event_repo: AsyncMock) -> None:
    service = CalendarQueryService(event_repo, clock=lambda: NOW)
    with pytest.raises(ValidationException) as exc_info:
        await service.events(NOW, NOW - timedelta(days=1))
    assert exc_info.value.fields == ["end"]


@pytest.mark.parametrize(("limit", "expected"), [(None, 10), (0, 1), (5, 5), (1000, 100)])
async def test_upcoming_limit_is_clamped(event_repo: AsyncMock, limit, expected) -> None:
    service = CalendarQueryService(event_repo, clock=lambda: NOW)
    await service.upcoming(limit)
    event_repo.list_upcoming.assert_awaited_once_with(NOW, expected)
