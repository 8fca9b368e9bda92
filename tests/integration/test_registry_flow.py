"""End-to-end registry flow against PostgreSQL (requires DATABASE_URL and migrations).

Run: alembic upgrade head && pytest -m requires_db
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.requires_db


def _letter_number(prefix: str) -> str:
    return f"{prefix}/{uuid.uuid4().hex[:8].upper()}/2024"


def _incoming(number: str, **overrides) -> dict:
    payload = {
        "letterNumber": number,
        "subject": "Undangan Rapat Koordinasi",
        "sender": "Dinas Pendidikan",
        "recipient": "Kepala Bidang",
        "processor": "Staff Arsip",
        "receivedDate": "2024-01-10T00:00:00Z",
    }
    payload.update(overrides)
    return payload


async def test_incoming_letter_lifecycle(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    number = _letter_number("001")
    event_date = (datetime.now(UTC) + timedelta(days=10)).replace(microsecond=0)

    created = await client.post(
        "/api/v1/incoming-letters",
        json=_incoming(
            number,
            isInvitation=True,
            eventDate=event_date.isoformat(),
            eventTime="09:00",
            eventLocation="Aula",
        ),
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    letter_id = created.json()["id"]

    duplicate = await client.post(
        "/api/v1/incoming-letters", json=_incoming(number), headers=auth_headers
    )
    assert duplicate.status_code == 409

    events = await client.get(
        "/api/v1/calendar/events",
        params={
            "start": (event_date - timedelta(days=1)).isoformat(),
            "end": (event_date + timedelta(days=1)).isoformat(),
        },
        headers=auth_headers,
    )
    assert events.status_code == 200
    assert number in [e["letterNumber"] for e in events.json()]

    routed = await client.post(
        f"/api/v1/incoming-letters/{letter_id}/dispositions",
        json={"dispositionTo": "UMPEG", "notes": "Mohon ditindaklanjuti"},
        headers=auth_headers,
    )
    assert routed.status_code == 201

    disposition = await client.get(
        f"/api/v1/dispositions/{routed.json()['id']}", headers=auth_headers
    )
    assert disposition.status_code == 200
    assert disposition.json()["incomingLetter"]["letterNumber"] == number

    fetched = await client.get(f"/api/v1/incoming-letters/{letter_id}", headers=auth_headers)
    assert fetched.status_code == 200
    assert [d["dispositionTo"] for d in fetched.json()["dispositions"]] == ["UMPEG"]

    deleted = await client.delete(f"/api/v1/incoming-letters/{letter_id}", headers=auth_headers)
    assert deleted.status_code == 204

    history = await client.get(
        f"/api/v1/dispositions/letter/{letter_id}", headers=auth_headers
    )
    assert history.status_code == 404

    events = await client.get(
        "/api/v1/calendar/events",
        params={
            "start": (event_date - timedelta(days=1)).isoformat(),
            "end": (event_date + timedelta(days=1)).isoformat(),
        },
        headers=auth_headers,
    )
    assert number not in [e["letterNumber"] for e in events.json()]


async def test_new_invitation_is_broadcast(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    subject = f"Rapat Evaluasi {uuid.uuid4().hex[:6]}"
    event_date = datetime.now(UTC) + timedelta(days=5)
    created = await client.post(
        "/api/v1/incoming-letters",
        json=_incoming(
            _letter_number("002"),
            subject=subject,
            isInvitation=True,
            eventDate=event_date.isoformat(),
        ),
        headers=auth_headers,
    )
    assert created.status_code == 201

    listed = await client.get(
        "/api/v1/notifications", params={"limit": 100}, headers=auth_headers
    )
    assert listed.status_code == 200
    assert any(subject in n["message"] for n in listed.json()["items"])


async def test_outgoing_letter_defaults(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await client.post(
        "/api/v1/outgoing-letters",
        json={**_incoming(_letter_number("003")), "createdDate": "2024-01-10T00:00:00Z"},
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    assert created.json()["securityClass"] == "BIASA"
