"""Outbound email for reminder copies: SMTP (smtplib in a worker thread) or log-only.

Delivery is best-effort: send() never raises. Missing credentials skip the
send with a warning; transport errors are logged.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class SmtpMailer:
    """IMailer over SMTP (SMTP_SSL when SMTP_SECURE, otherwise STARTTLS)."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        *,
        secure: bool = False,
        from_name: str = "ARSANA System",
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.secure = secure
        self.from_name = from_name
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    def _build_message(self, to_email: str, subject: str, html: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.username))
        msg["To"] = to_email
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def _send_sync(self, to_email: str, subject: str, html: str) -> None:
        """Blocking send (run via asyncio.to_thread)."""
        msg = self._build_message(to_email, subject, html)
        context = ssl.create_default_context()
        server: smtplib.SMTP
        if self.secure:
            server = smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=self.timeout
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if not self.secure:
                server.starttls(context=context)
            server.login(self.username, self.password)
            server.sendmail(self.username, [to_email], msg.as_string())
        finally:
            server.quit()

    async def send(self, to_email: str, subject: str, html: str) -> bool:
        if not self.configured:
            logger.warning("SMTP credentials not configured, skipping email to %s", to_email)
            return False
        try:
            await asyncio.to_thread(self._send_sync, to_email, subject, html)
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send email to %s (subject=%r)", to_email, subject[:80])
            return False
        logger.info("Email sent to %s (subject=%r)", to_email, subject[:80])
        return True


class LogOnlyMailer:
    """IMailer that logs instead of sending. Used when no SMTP is configured."""

    async def send(self, to_email: str, subject: str, html: str) -> bool:
        logger.info(
            "SMTP not configured; would send email to %s (subject=%r)",
            to_email,
            (subject or "")[:80],
        )
        return False


def create_mailer(settings: Settings) -> SmtpMailer | LogOnlyMailer:
    """SmtpMailer when SMTP_HOST, SMTP_USER and SMTP_PASSWORD are set, else LogOnlyMailer."""
    if not settings.smtp_configured:
        logger.warning("SMTP credentials not configured; reminder emails will be skipped")
        return LogOnlyMailer()
    password = settings.smtp_password.get_secret_value() if settings.smtp_password else ""
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=password,
        secure=settings.smtp_secure,
        from_name=settings.smtp_from_name,
        timeout=settings.smtp_timeout_seconds,
    )
