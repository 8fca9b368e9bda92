"""Shared utilities: telemetry (logging) and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    days_until,
    ensure_utc,
    format_date_id,
    generate_cuid,
    utc_now,
)

__all__ = [
    "days_until",
    "ensure_utc",
    "format_date_id",
    "generate_cuid",
    "utc_now",
]
