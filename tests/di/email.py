"""Mock email providers for testing."""

from dishka import Scope, provide

from teamdesk.adapter.smtp import MockEmailTransport
from teamdesk.domain.service import EmailTransport
from teamdesk.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Mock email provider recording messages instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_email_transport(self) -> EmailTransport:
        """Provide recording email transport."""
        return MockEmailTransport()
