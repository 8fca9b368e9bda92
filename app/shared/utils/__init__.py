"""Shared utilities: datetime, generators, display formatting."""

from app.shared.utils.datetime import (
    days_until,
    ensure_utc,
    utc_now,
)
from app.shared.utils.formatting import format_date_id
from app.shared.utils.generators import generate_cuid

__all__ = [
    "days_until",
    "ensure_utc",
    "format_date_id",
    "generate_cuid",
    "utc_now",
]
