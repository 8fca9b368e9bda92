"""Letter request schemas through parse_input (form/JSON field handling)."""

from datetime import UTC, datetime, timedelta

import pytest

from app.application.dtos.letter import UNSET
from app.domain.enums import LetterNature
from app.domain.exceptions import ValidationException
from app.schemas.common import parse_input
from app.schemas.letter import (
    IncomingLetterCreate,
    IncomingLetterUpdate,
    OutgoingLetterCreate,
)


def _incoming_form(**overrides) -> dict:
    data = {
        "letterNumber": "001/SK/2024",
        "subject": "Undangan Rapat Koordinasi",
        "sender": "Dinas Pendidikan",
        "recipient": "Kepala Bidang",
        "processor": "Staff Arsip",
        "receivedDate": "2024-01-10T00:00:00Z",
    }
    data.update(overrides)
    return data


def _messages(exc: ValidationException) -> dict[str, str]:
    return {e.field: e.message for e in exc.errors}


def test_minimal_incoming_letter() -> None:
    body = parse_input(IncomingLetterCreate, _incoming_form())
    data = body.to_create()
    assert data.letter_number == "001/SK/2024"
    assert data.letter_nature == LetterNature.BIASA
    assert data.is_invitation is False
    assert data.received_date == datetime(2024, 1, 10, tzinfo=UTC)


def test_text_values_are_trimmed() -> None:
    body = parse_input(IncomingLetterCreate, _incoming_form(sender="  Dinas Pendidikan  "))
    assert body.sender == "Dinas Pendidikan"


def test_short_letter_number_names_the_field() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterCreate, _incoming_form(letterNumber="01"))
    assert _messages(exc_info.value) == {"letterNumber": "Nomor surat minimal 3 karakter"}
    assert exc_info.value.message == "Data yang dimasukkan tidak valid"


def test_letter_number_character_set() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterCreate, _incoming_form(letterNumber="001 SK#2024"))
    assert exc_info.value.fields == ["letterNumber"]


def test_every_failed_field_is_reported() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_input(
            IncomingLetterCreate,
            _incoming_form(subject="abc", sender="A", recipient=""),
        )
    assert set(exc_info.value.fields) == {"subject", "sender", "recipient"}


def test_missing_required_field_uses_api_name() -> None:
    data = _incoming_form()
    del data["receivedDate"]
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterCreate, data)
    assert exc_info.value.fields == ["receivedDate"]


def test_received_date_cannot_be_in_future() -> None:
    future = (datetime.now(UTC) + timedelta(days=2)).isoformat()
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterCreate, _incoming_form(receivedDate=future))
    assert _messages(exc_info.value) == {
        "receivedDate": "Tanggal diterima tidak boleh di masa depan"
    }


def test_form_values_blank_and_flag_spellings() -> None:
    """Form posts send every field as text; blanks mean not given."""
    body = parse_input(
        IncomingLetterCreate,
        _incoming_form(
            isInvitation="true",
            eventDate="2024-01-15T02:00:00Z",
            eventLocation="",
            needsFollowUp="",
            note="   ",
        ),
    )
    assert body.is_invitation is True
    assert body.event_location is None
    assert body.needs_follow_up is False
    assert body.note is None


def test_unknown_letter_nature_rejected() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterCreate, _incoming_form(letterNature="URGENT"))
    assert exc_info.value.fields == ["letterNature"]


def test_outgoing_letter_requires_created_date() -> None:
    data = _incoming_form()
    del data["receivedDate"]
    with pytest.raises(ValidationException) as exc_info:
        parse_input(OutgoingLetterCreate, data)
    assert exc_info.value.fields == ["createdDate"]

    data["createdDate"] = "2024-01-10T00:00:00Z"
    data["serialNumber"] = "12"
    body = parse_input(OutgoingLetterCreate, data)
    assert body.to_create().serial_number == 12


def test_update_keeps_unsent_fields_unset() -> None:
    body = parse_input(IncomingLetterUpdate, {"subject": "Perihal Yang Baru", "note": None})
    patch = body.to_patch()
    assert patch.subject == "Perihal Yang Baru"
    assert patch.note is None
    assert patch.letter_number is UNSET
    assert patch.received_date is UNSET


def test_update_rejects_null_on_required_field() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_input(IncomingLetterUpdate, {"letterNumber": None})
    assert _messages(exc_info.value) == {"letterNumber": "Field ini tidak boleh dikosongkan"}


def test_snake_case_keys_are_accepted() -> None:
    body = parse_input(IncomingLetterUpdate, {"letter_number": "002/SK/2024"})
    assert body.to_patch().letter_number == "002/SK/2024"
