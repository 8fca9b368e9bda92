"""Disposition use cases."""

from app.application.use_cases.dispositions.disposition_router import (
    DispositionRouter,
    parse_target,
)

__all__ = ["DispositionRouter", "parse_target"]
