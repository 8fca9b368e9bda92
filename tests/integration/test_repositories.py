"""Repository queries against PostgreSQL (requires DATABASE_URL and migrations).

Covers the query shapes that mocks cannot: notification visibility,
letter-number uniqueness, search and the reminder scans. Every test runs in
the db_session transaction, which is rolled back afterwards; assertions are
written so that rows already in the database do not affect them.
"""

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.common import PageRequest
from app.application.dtos.letter import LetterListFilter
from app.application.dtos.notification import NotificationCreate
from app.application.use_cases.calendar import event_data_for
from app.application.use_cases.reminders import OVERDUE_BATCH_LIMIT, ReminderJobs
from app.domain.enums import LetterDirection
from app.infrastructure.persistence.models.letter import IncomingLetter
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories import (
    CalendarEventRepository,
    IncomingLetterRepository,
    NotificationRepository,
)
from tests.factories import letter_create

pytestmark = pytest.mark.requires_db

NOW = datetime(2024, 1, 10, 3, 0, tzinfo=UTC)


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}"


@pytest.fixture
async def owners(db_session: AsyncSession) -> tuple[User, User]:
    first = User(email=f"{_unique('u1')}@arsana.go.id", name="User Satu", hashed_password="x")
    second = User(email=f"{_unique('u2')}@arsana.go.id", name="User Dua", hashed_password="x")
    db_session.add_all([first, second])
    await db_session.flush()
    return first, second


async def _letter(repo: IncomingLetterRepository, owner: User, **overrides):
    data = letter_create(letter_number=_unique("SK").upper(), **overrides)
    return await repo.create_letter(data.column_values(LetterDirection.INCOMING), owner.id)


async def test_notifications_visible_to_owner_and_broadcast(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    me, other_user = owners
    repo = NotificationRepository(db_session)
    unread_before = await repo.count_unread(me.id)

    broadcast = await repo.create_notification(NotificationCreate("Semua", "untuk semua"))
    own = await repo.create_notification(NotificationCreate("Saya", "untuk saya", user_id=me.id))
    theirs = await repo.create_notification(
        NotificationCreate("Dia", "untuk dia", user_id=other_user.id)
    )

    items, _ = await repo.list_visible(me.id, PageRequest.of(1, 100))
    visible = {n.id for n in items}
    assert {broadcast.id, own.id} <= visible
    assert theirs.id not in visible
    assert await repo.get_visible(theirs.id, me.id) is None
    assert await repo.count_unread(me.id) == unread_before + 2

    await repo.mark_read(own.id)
    assert await repo.count_unread(me.id) == unread_before + 1

    await repo.mark_all_read(me.id)
    assert await repo.count_unread(me.id) == 0
    # The broadcast read flag is shared; the other user's own row stays unread.
    assert await repo.count_unread(other_user.id) == 1


async def test_letter_number_taken_and_search(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    owner, _ = owners
    repo = IncomingLetterRepository(db_session)
    keyword = _unique("Triwulan")
    first = await _letter(repo, owner)
    second = await _letter(repo, owner, subject=f"Laporan Keuangan {keyword}")

    assert first.user is not None and first.user.name == "User Satu"
    assert await repo.letter_number_taken(first.letter_number)
    assert not await repo.letter_number_taken(first.letter_number, exclude_id=first.id)

    items, total = await repo.list_letters(
        LetterListFilter(search=keyword.lower()), PageRequest.of(1, 10), NOW
    )
    assert total == 1
    assert items[0].id == second.id


async def test_search_percent_matches_literally(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    owner, _ = owners
    repo = IncomingLetterRepository(db_session)
    keyword = _unique("Dana")
    plain = await _letter(repo, owner, subject=f"Rapat Koordinasi {keyword}")
    percent = await _letter(repo, owner, subject=f"{keyword} 100% cair")

    items, _ = await repo.list_letters(
        LetterListFilter(search=f"{keyword} 100%"), PageRequest.of(1, 10), NOW
    )
    assert [letter.id for letter in items] == [percent.id]

    # As LIKE patterns these would match the second subject.
    for term in (f"{keyword}%cair", f"{keyword}_100"):
        items, total = await repo.list_letters(
            LetterListFilter(search=term), PageRequest.of(1, 10), NOW
        )
        assert total == 0, term

    items, _ = await repo.list_letters(
        LetterListFilter(search=keyword.lower()), PageRequest.of(1, 10), NOW
    )
    assert {letter.id for letter in items} == {plain.id, percent.id}


async def test_overdue_invitations_reported_once(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    owner, _ = owners
    repo = IncomingLetterRepository(db_session)
    past = await _letter(
        repo,
        owner,
        is_invitation=True,
        received_date=NOW - timedelta(days=10),
        event_date=NOW - timedelta(days=1),
    )
    future = await _letter(
        repo, owner, is_invitation=True, event_date=NOW + timedelta(days=5)
    )

    overdue_ids = [letter.id for letter in await repo.list_overdue_invitations(NOW, 100)]
    assert past.id in overdue_ids
    assert future.id not in overdue_ids

    assert await repo.mark_overdue_notified([past.id], NOW) == 1
    overdue_ids = [letter.id for letter in await repo.list_overdue_invitations(NOW, 100)]
    assert past.id not in overdue_ids


async def test_overdue_job_reports_batches_of_twenty(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    """Each run stamps at most one batch; the next run picks up the rest."""
    owner, _ = owners
    repo = IncomingLetterRepository(db_session)
    # Far enough in the past that no other overdue invitation precedes these.
    run_at = datetime(1990, 1, 2, tzinfo=UTC)
    created = []
    for minutes in range(OVERDUE_BATCH_LIMIT + 3):
        event_date = run_at - timedelta(days=1, minutes=minutes)
        letter = await _letter(
            repo, owner, is_invitation=True, received_date=event_date, event_date=event_date
        )
        created.append(letter.id)

    sink = AsyncMock()
    jobs = ReminderJobs(repo, AsyncMock(), AsyncMock(), sink, clock=lambda: run_at)

    first = await jobs.check_overdue_invitations()
    second = await jobs.check_overdue_invitations()
    third = await jobs.check_overdue_invitations()

    messages = [call.args[0].message for call in sink.create.await_args_list]
    assert (first.notifications, second.notifications, third.notifications) == (1, 1, 0)
    assert messages[0].startswith(f"{OVERDUE_BATCH_LIMIT} undangan")
    assert messages[1].startswith("3 undangan")
    assert await repo.list_overdue_invitations(run_at, 100) == []
    assert await repo.count(
        IncomingLetter.id.in_(created), IncomingLetter.overdue_notified_at == run_at
    ) == len(created)


async def test_reminder_candidates_and_flags(
    db_session: AsyncSession, owners: tuple[User, User]
) -> None:
    owner, _ = owners
    letters = IncomingLetterRepository(db_session)
    events = CalendarEventRepository(db_session)
    letter = await _letter(
        letters, owner, is_invitation=True, event_date=NOW + timedelta(days=2)
    )
    event = await events.create_event(
        LetterDirection.INCOMING, letter.id, letter.user_id, event_data_for(letter)
    )

    candidates = await events.list_reminder_candidates(NOW, NOW + timedelta(days=3))
    (candidate,) = [c for c in candidates if c.event.id == event.id]
    assert candidate.owner_email == owner.email

    await events.mark_notified(event.id, three_days=True, one_day=True)
    candidates = await events.list_reminder_candidates(NOW, NOW + timedelta(days=3))
    assert event.id not in [c.event.id for c in candidates]

    cards = await events.list_between(NOW, NOW + timedelta(days=30))
    (card,) = [c for c in cards if c.id == event.id]
    assert card.letter_number == letter.letter_number
    assert card.type == LetterDirection.INCOMING
