"""Domain enumerations for the letter registry.

Enums represent fixed sets of domain values (letter classification,
department codes, notification severity). Values are the wire values used
by the API and stored in the database.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class LetterDirection(_ValuesMixin, str, Enum):
    """Which register a letter belongs to."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


class LetterNature(_ValuesMixin, str, Enum):
    """Sifat surat: how a letter must be handled."""

    BIASA = "BIASA"
    TERBATAS = "TERBATAS"
    RAHASIA = "RAHASIA"
    SANGAT_RAHASIA = "SANGAT_RAHASIA"
    PENTING = "PENTING"


class SecurityClass(_ValuesMixin, str, Enum):
    """Security classification of outgoing letters."""

    BIASA = "BIASA"


class DispositionMethod(_ValuesMixin, str, Enum):
    """How a letter is routed: by hand or through the Srikandi system."""

    MANUAL = "MANUAL"
    SRIKANDI = "SRIKANDI"


class DispositionTarget(_ValuesMixin, str, Enum):
    """Internal departments a letter may be routed to.

    Closed set; unknown codes are rejected by the Disposition Router.
    """

    UMPEG = "UMPEG"
    PERENCANAAN = "PERENCANAAN"
    KAUR_KEUANGAN = "KAUR_KEUANGAN"
    KABID = "KABID"
    BIDANG1 = "BIDANG1"
    BIDANG2 = "BIDANG2"
    BIDANG3 = "BIDANG3"
    BIDANG4 = "BIDANG4"
    BIDANG5 = "BIDANG5"


class NotificationType(_ValuesMixin, str, Enum):
    """Notification severity."""

    INFO = "INFO"
    WARNING = "WARNING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class EventType(_ValuesMixin, str, Enum):
    """Calendar event kind. Letter-derived events are meetings."""

    MEETING = "MEETING"
    APPOINTMENT = "APPOINTMENT"
    DEADLINE = "DEADLINE"
    OTHER = "OTHER"


class UserRole(_ValuesMixin, str, Enum):
    """User role. ADMIN may edit or delete any letter."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"
