"""Display formatting for notification and email text (Indonesian locale)."""

from datetime import datetime
from zoneinfo import ZoneInfo

from app.shared.utils.datetime import ensure_utc

_MONTHS_ID = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)

_DAYS_ID = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")


def format_date_id(
    value: datetime,
    timezone: str = "Asia/Jakarta",
    *,
    with_weekday: bool = False,
) -> str:
    """Format a datetime as e.g. '10 Januari 2024' in the office timezone.

    with_weekday prefixes the day name ('Rabu, 10 Januari 2024').
    """
    local = ensure_utc(value).astimezone(ZoneInfo(timezone))
    text = f"{local.day} {_MONTHS_ID[local.month - 1]} {local.year}"
    if with_weekday:
        return f"{_DAYS_ID[local.weekday()]}, {text}"
    return text
