"""Shared telemetry: logging setup and request-id context."""

from app.shared.telemetry.logging import (
    RequestIDFilter,
    request_id_var,
    setup_logging,
)

__all__ = [
    "RequestIDFilter",
    "request_id_var",
    "setup_logging",
]
