"""Email infrastructure providers."""

from dishka import Scope, provide
import logfire

from teamdesk.adapter.smtp import ConsoleEmailTransport, SmtpEmailTransport
from teamdesk.config import EmailSettings
from teamdesk.domain.service import EmailTransport
from teamdesk.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider.

    Uses SMTP when a host is configured, otherwise logs messages.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_transport(self, email_settings: EmailSettings) -> EmailTransport:
        """Provide email transport."""
        if not email_settings.host:
            logfire.warn("EMAIL__HOST not set, invitation emails will be logged only")
            return ConsoleEmailTransport()
        return SmtpEmailTransport(email_settings)
