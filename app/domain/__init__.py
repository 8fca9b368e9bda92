"""Domain layer: letter rules, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import LetterSchedule, can_modify_letter, ensure_letter_rules
from app.domain.enums import (
    DispositionMethod,
    DispositionTarget,
    EventType,
    LetterDirection,
    LetterNature,
    NotificationType,
    SecurityClass,
    UserRole,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    FieldError,
    RegistryException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Rules
    "LetterSchedule",
    "can_modify_letter",
    "ensure_letter_rules",
    # Enums
    "DispositionMethod",
    "DispositionTarget",
    "EventType",
    "LetterDirection",
    "LetterNature",
    "NotificationType",
    "SecurityClass",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "FieldError",
    "RegistryException",
    "ResourceNotFoundException",
    "ValidationException",
]
