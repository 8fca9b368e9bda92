"""Domain entities and rules.

Pure domain logic; no ORM or persistence concerns.
"""

from app.domain.entities.letter import (
    LetterSchedule,
    can_modify_letter,
    ensure_letter_rules,
    letter_rule_errors,
)

__all__ = [
    "LetterSchedule",
    "can_modify_letter",
    "ensure_letter_rules",
    "letter_rule_errors",
]
