"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    ICalendarEventRepository,
    IDispositionRepository,
    IIncomingLetterRepository,
    ILetterRepository,
    INotificationRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    ICalendarProjector,
    ILetterFileStorage,
    IMailer,
    INotificationSink,
    ITransaction,
)

__all__ = [
    "ICalendarEventRepository",
    "ICalendarProjector",
    "IDispositionRepository",
    "IIncomingLetterRepository",
    "ILetterFileStorage",
    "ILetterRepository",
    "IMailer",
    "INotificationRepository",
    "INotificationSink",
    "ITransaction",
    "IUserRepository",
]
