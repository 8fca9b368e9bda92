"""LetterService unit tests with mocked repository, projector, sink and storage."""

from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.letter import AttachmentUpload, LetterListFilter, LetterPatch
from app.application.dtos.common import PageRequest
from app.application.use_cases.letters import LetterService
from app.domain.enums import LetterDirection, NotificationType, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateLetterNumberException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.factories import NOW, invitation, letter_create, letter_result


def _pdf(name: str = "surat.pdf") -> AttachmentUpload:
    return AttachmentUpload(filename=name, content_type="application/pdf", data=b"%PDF-1.4")


@pytest.fixture
def mocks():
    letter_repo = AsyncMock()
    letter_repo.direction = LetterDirection.INCOMING
    letter_repo.letter_number_taken = AsyncMock(return_value=False)
    letter_repo.create_letter = AsyncMock(return_value=letter_result())
    projector = AsyncMock()
    notifications = AsyncMock()
    storage = AsyncMock()
    storage.stream = MagicMock(return_value=iter(()))
    transaction = AsyncMock()
    service = LetterService(
        letter_repo=letter_repo,
        projector=projector,
        notifications=notifications,
        storage=storage,
        transaction=transaction,
        max_upload_size=1024 * 1024,
        clock=lambda: NOW,
    )
    return service, letter_repo, projector, notifications, storage, transaction


async def test_create_letter_persists_projects_and_commits(mocks) -> None:
    service, repo, projector, notifications, storage, tx = mocks
    result = await service.create_letter(letter_create(), "user-staff")

    assert result.letter_number == "001/SK/2024"
    values, actor = repo.create_letter.call_args.args
    assert actor == "user-staff"
    assert values["letter_number"] == "001/SK/2024"
    assert "created_date" not in values
    projector.sync.assert_awaited_once_with(result)
    notifications.create.assert_not_awaited()
    tx.commit.assert_awaited_once()
    storage.write.assert_not_awaited()


async def test_create_invitation_announces_event_and_follow_up(mocks) -> None:
    service, repo, _, notifications, _, _ = mocks
    created = invitation(needs_follow_up=True, follow_up_deadline=NOW.replace(day=20))
    repo.create_letter.return_value = created

    await service.create_letter(
        letter_create(
            is_invitation=True,
            event_date=created.event_date,
            needs_follow_up=True,
            follow_up_deadline=created.follow_up_deadline,
        ),
        "user-staff",
    )

    sent = [call.args[0] for call in notifications.create.await_args_list]
    assert [(n.title, n.type) for n in sent] == [
        ("Undangan Baru Diterima", NotificationType.INFO),
        ("Surat Perlu Tindak Lanjut", NotificationType.WARNING),
    ]
    assert sent[0].user_id is None
    assert sent[0].message == (
        'Anda memiliki undangan untuk acara "Undangan Rapat Koordinasi" pada 15 Januari 2024'
    )


async def test_create_rejects_invitation_without_event_date(mocks) -> None:
    service, repo, _, _, storage, tx = mocks
    with pytest.raises(ValidationException) as exc_info:
        await service.create_letter(letter_create(is_invitation=True), "user-staff")
    assert exc_info.value.fields == ["eventDate"]
    repo.create_letter.assert_not_awaited()
    storage.write.assert_not_awaited()
    tx.commit.assert_not_awaited()


async def test_create_duplicate_number_is_conflict(mocks) -> None:
    service, repo, _, _, storage, _ = mocks
    repo.letter_number_taken.return_value = True
    with pytest.raises(DuplicateLetterNumberException):
        await service.create_letter(letter_create(), "user-staff", _pdf())
    storage.write.assert_not_awaited()


async def test_create_stores_attachment_before_insert(mocks) -> None:
    service, repo, _, _, storage, _ = mocks
    await service.create_letter(letter_create(), "user-staff", _pdf())

    path, data = storage.write.call_args.args
    assert path.startswith("letters/incoming/incoming-")
    assert path.endswith("-surat.pdf")
    assert data == b"%PDF-1.4"
    values = repo.create_letter.call_args.args[0]
    assert values["file_name"] == "surat.pdf"
    assert values["file_path"] == path


async def test_create_invalid_attachment_rejected_before_any_write(mocks) -> None:
    service, repo, _, _, storage, _ = mocks
    bad = AttachmentUpload(filename="virus.exe", content_type="application/pdf", data=b"MZ")
    with pytest.raises(ValidationException):
        await service.create_letter(letter_create(), "user-staff", bad)
    repo.letter_number_taken.assert_not_awaited()
    storage.write.assert_not_awaited()


async def test_create_failure_rolls_back_and_removes_file(mocks) -> None:
    service, _, projector, _, storage, tx = mocks
    projector.sync.side_effect = RuntimeError("db down")
    with pytest.raises(RuntimeError):
        await service.create_letter(letter_create(), "user-staff", _pdf())
    tx.rollback.assert_awaited_once()
    tx.commit.assert_not_awaited()
    written = storage.write.call_args.args[0]
    storage.delete.assert_awaited_once_with(written)


async def test_update_by_other_staff_forbidden(mocks) -> None:
    service, repo, _, _, _, _ = mocks
    repo.get_letter = AsyncMock(return_value=letter_result(user_id="owner"))
    with pytest.raises(AuthorizationException):
        await service.update_letter(
            "letter-1", LetterPatch(subject="Perihal Baru"), "intruder", UserRole.STAFF
        )
    repo.update_letter.assert_not_awaited()


async def test_admin_may_update_any_letter(mocks) -> None:
    service, repo, projector, _, _, tx = mocks
    stored = letter_result(user_id="owner")
    updated = replace(stored, subject="Perihal Baru")
    repo.get_letter = AsyncMock(return_value=stored)
    repo.update_letter = AsyncMock(return_value=updated)

    result = await service.update_letter(
        "letter-1", LetterPatch(subject="Perihal Baru"), "admin", UserRole.ADMIN
    )

    assert result.subject == "Perihal Baru"
    repo.update_letter.assert_awaited_once_with("letter-1", {"subject": "Perihal Baru"})
    projector.sync.assert_awaited_once_with(updated)
    tx.commit.assert_awaited_once()


async def test_update_rules_run_on_merged_state(mocks) -> None:
    """Turning on isInvitation without a stored event date fails."""
    service, repo, _, _, _, _ = mocks
    repo.get_letter = AsyncMock(return_value=letter_result())
    with pytest.raises(ValidationException) as exc_info:
        await service.update_letter(
            "letter-1", LetterPatch(is_invitation=True), "user-staff", UserRole.STAFF
        )
    assert exc_info.value.fields == ["eventDate"]


async def test_update_duplicate_check_only_when_number_changes(mocks) -> None:
    service, repo, _, _, _, _ = mocks
    stored = letter_result()
    repo.get_letter = AsyncMock(return_value=stored)
    repo.update_letter = AsyncMock(return_value=stored)

    await service.update_letter(
        "letter-1", LetterPatch(letter_number=stored.letter_number), "user-staff", UserRole.STAFF
    )
    repo.letter_number_taken.assert_not_awaited()

    repo.letter_number_taken.return_value = True
    with pytest.raises(DuplicateLetterNumberException):
        await service.update_letter(
            "letter-1", LetterPatch(letter_number="002/SK/2024"), "user-staff", UserRole.STAFF
        )
    repo.letter_number_taken.assert_awaited_with("002/SK/2024", exclude_id="letter-1")


async def test_update_replacing_file_removes_old_one_after_commit(mocks) -> None:
    service, repo, _, _, storage, tx = mocks
    stored = letter_result(file_name="lama.pdf", file_path="letters/incoming/old.pdf")
    repo.get_letter = AsyncMock(return_value=stored)
    repo.update_letter = AsyncMock(return_value=stored)

    await service.update_letter(
        "letter-1", LetterPatch(), "user-staff", UserRole.STAFF, _pdf("baru.pdf")
    )

    tx.commit.assert_awaited_once()
    storage.delete.assert_awaited_once_with("letters/incoming/old.pdf")
    changes = repo.update_letter.call_args.args[1]
    assert changes["file_name"] == "baru.pdf"


async def test_update_failure_keeps_old_file(mocks) -> None:
    service, repo, _, _, storage, tx = mocks
    stored = letter_result(file_path="letters/incoming/old.pdf")
    repo.get_letter = AsyncMock(return_value=stored)
    repo.update_letter = AsyncMock(side_effect=RuntimeError("constraint"))

    with pytest.raises(RuntimeError):
        await service.update_letter(
            "letter-1", LetterPatch(), "user-staff", UserRole.STAFF, _pdf("baru.pdf")
        )

    tx.rollback.assert_awaited_once()
    new_path = storage.write.call_args.args[0]
    storage.delete.assert_awaited_once_with(new_path)


async def test_update_missing_letter_is_not_found(mocks) -> None:
    service, repo, _, _, _, _ = mocks
    repo.get_letter = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.update_letter("nope", LetterPatch(), "user-staff", UserRole.STAFF)
    assert exc_info.value.details["resource_type"] == "incoming_letter"


async def test_delete_removes_event_row_and_file(mocks) -> None:
    service, repo, projector, _, storage, tx = mocks
    repo.get_letter = AsyncMock(return_value=letter_result(file_path="letters/incoming/a.pdf"))

    await service.delete_letter("letter-1", "user-staff", UserRole.STAFF)

    projector.remove_for_letter.assert_awaited_once_with(LetterDirection.INCOMING, "letter-1")
    repo.delete_letter.assert_awaited_once_with("letter-1")
    tx.commit.assert_awaited_once()
    storage.delete.assert_awaited_once_with("letters/incoming/a.pdf")


async def test_delete_file_failure_does_not_fail_request(mocks) -> None:
    service, repo, _, _, storage, _ = mocks
    repo.get_letter = AsyncMock(return_value=letter_result(file_path="letters/incoming/a.pdf"))
    storage.delete.side_effect = OSError("busy")
    await service.delete_letter("letter-1", "user-staff", UserRole.STAFF)


async def test_list_letters_builds_pagination(mocks) -> None:
    service, repo, _, _, _, _ = mocks
    repo.list_letters = AsyncMock(return_value=([letter_result()], 11))
    page = await service.list_letters(LetterListFilter(search="rapat"), PageRequest.of(1, 10))
    assert page.pagination.pages == 2
    assert repo.list_letters.call_args.args[2] == NOW


async def test_open_attachment_without_file_is_not_found(mocks) -> None:
    service, repo, _, _, _, _ = mocks
    repo.get_letter = AsyncMock(return_value=letter_result())
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.open_attachment("letter-1")
    assert exc_info.value.details["resource_type"] == "attachment"


async def test_open_attachment_streams_stored_file(mocks) -> None:
    service, repo, _, _, storage, _ = mocks
    repo.get_letter = AsyncMock(return_value=letter_result(file_path="letters/incoming/a.pdf"))
    storage.exists = AsyncMock(return_value=True)
    letter, _ = await service.open_attachment("letter-1")
    assert letter.file_path == "letters/incoming/a.pdf"
    storage.stream.assert_called_once_with("letters/incoming/a.pdf")
