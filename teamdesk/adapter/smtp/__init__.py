"""SMTP email transport."""

from .client import (
    ConsoleEmailTransport,
    MockEmailTransport,
    SmtpEmailTransport,
    classify_smtp_error,
)

__all__ = [
    "ConsoleEmailTransport",
    "MockEmailTransport",
    "SmtpEmailTransport",
    "classify_smtp_error",
]
