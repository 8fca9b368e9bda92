"""Outbound email: SMTP mailer and log-only fallback."""

from app.infrastructure.external.email.smtp_mailer import (
    LogOnlyMailer,
    SmtpMailer,
    create_mailer,
)

__all__ = ["LogOnlyMailer", "SmtpMailer", "create_mailer"]
