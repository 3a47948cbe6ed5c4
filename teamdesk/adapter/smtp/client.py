"""SMTP email transport implementation.

smtplib is blocking, so each send runs in a worker thread.
"""

import asyncio
import smtplib
from email.message import EmailMessage as MimeMessage

import logfire

from teamdesk.adapter.error import EmailConfigurationError
from teamdesk.config import EmailSettings
from teamdesk.domain.error import (
    PermanentTransportError,
    TransientTransportError,
    TransportError,
)
from teamdesk.domain.service.email_dispatcher import EmailMessage, EmailTransport


def classify_smtp_error(error: Exception) -> TransportError:
    """Map an smtplib/socket error onto the retry taxonomy.

    Connection problems, authentication failures and 4xx replies are
    transient. Refused recipients and other 5xx replies are permanent.
    """
    if isinstance(error, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected)):
        return TransientTransportError(f"SMTP connection failed: {error}")
    if isinstance(error, smtplib.SMTPAuthenticationError):
        return TransientTransportError(f"SMTP authentication failed: {error.smtp_code}")
    if isinstance(error, smtplib.SMTPRecipientsRefused):
        refused = ", ".join(sorted(error.recipients))
        return PermanentTransportError(f"Recipient refused: {refused}")
    if isinstance(error, smtplib.SMTPResponseException):
        message = f"SMTP {error.smtp_code}: {error.smtp_error!r}"
        if 400 <= error.smtp_code < 500:
            return TransientTransportError(message)
        return PermanentTransportError(message)
    if isinstance(error, smtplib.SMTPException):
        # Protocol-level problems that a retry will not fix
        return PermanentTransportError(f"SMTP error: {error}")
    if isinstance(error, OSError):
        # Timeouts, refused connections, DNS failures
        return TransientTransportError(f"Network error: {error}")
    return PermanentTransportError(str(error))


def build_mime_message(message: EmailMessage, sender: str) -> MimeMessage:
    """Render an EmailMessage as a MIME message."""
    mime = MimeMessage()
    mime["From"] = sender
    mime["To"] = message.to
    mime["Subject"] = message.subject
    mime.set_content(message.body)
    if message.html:
        mime.add_alternative(message.html, subtype="html")
    return mime


class SmtpEmailTransport(EmailTransport):
    """Sends email through an SMTP relay."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP transport.

        Args:
            settings: Host, port, TLS mode and credentials

        Raises:
            EmailConfigurationError: If no host is configured
        """
        if not settings.host:
            raise EmailConfigurationError("EMAIL__HOST is not set")
        self.settings = settings

    async def send(self, message: EmailMessage) -> None:
        """Send a message, raising a classified TransportError on failure."""
        await asyncio.to_thread(self._send_blocking, message)

    def _send_blocking(self, message: EmailMessage) -> None:
        settings = self.settings
        mime = build_mime_message(message, settings.sender)
        smtp_class = smtplib.SMTP_SSL if settings.secure else smtplib.SMTP

        try:
            with smtp_class(
                settings.host, settings.port, timeout=settings.timeout_seconds
            ) as smtp:
                if not settings.secure:
                    smtp.ehlo()
                    if smtp.has_extn("starttls"):
                        smtp.starttls()
                        smtp.ehlo()
                if settings.auth_user:
                    smtp.login(settings.auth_user, settings.auth_secret or "")
                smtp.send_message(mime)
        except OSError as e:
            # smtplib.SMTPException derives from OSError
            raise classify_smtp_error(e) from e


class ConsoleEmailTransport(EmailTransport):
    """Logs messages instead of sending them (no SMTP host configured)."""

    async def send(self, message: EmailMessage) -> None:
        """Log the message."""
        logfire.info(
            "Email simulated (no SMTP host configured)",
            to=message.to,
            subject=message.subject,
            body=message.body,
        )


class MockEmailTransport(EmailTransport):
    """Mock transport for testing.

    Records every message it accepts. Queued failures are raised one per
    send call before any message is accepted.
    """

    def __init__(self, failures: list[Exception] | None = None) -> None:
        self.sent: list[EmailMessage] = []
        self.calls = 0
        self.failures: list[Exception] = list(failures or [])

    def fail_next(self, *errors: Exception) -> None:
        """Queue errors for the next send calls."""
        self.failures.extend(errors)

    async def send(self, message: EmailMessage) -> None:
        """Record the message or raise the next queued failure."""
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        self.sent.append(message)
