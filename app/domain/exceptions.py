"""Domain exceptions for the letter registry.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """One failed field-level check: API field name and human-readable message."""

    field: str
    message: str


class RegistryException(Exception):
    """Base exception for all registry application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RegistryException):
    """Raised when input validation fails (single field or a list of field errors).

    details is {"field": name} for a single field and always carries
    {"errors": [{"field", "message"}, ...]} so clients can read one shape.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        """Initialize with message and optional field name or field error list.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            errors: Optional list of field errors (schema or cross-field rules).
        """
        collected = list(errors or [])
        if field and not collected:
            collected = [FieldError(field=field, message=message)]
        self.errors = collected
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if collected:
            details["errors"] = [asdict(e) for e in collected]
        super().__init__(message, "VALIDATION_ERROR", details)

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed."""
        return [e.field for e in self.errors]


class AuthenticationException(RegistryException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(RegistryException):
    """Raised when the actor is neither the owner nor an administrator."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'incoming_letter').
            action: Optional action that was attempted (e.g. 'update', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(RegistryException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'incoming_letter', 'notification').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(RegistryException):
    """Raised when a unique key is already taken (e.g. letter number in a register)."""

    def __init__(self, message: str, field: str | None = None, value: str | None = None) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, "CONFLICT", details)


class DuplicateLetterNumberException(ConflictException):
    """Raised when creating or renumbering a letter to a number already registered."""

    def __init__(self, direction: str, letter_number: str) -> None:
        super().__init__(
            f"Nomor surat '{letter_number}' sudah ada.",
            field="letterNumber",
            value=letter_number,
        )
        self.details["direction"] = direction


class UserAlreadyExistsException(ConflictException):
    """Raised when registering an email that already has an account."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", field="email")


class SqlNotConfiguredException(RegistryException):
    """Raised when an operation requires the database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
