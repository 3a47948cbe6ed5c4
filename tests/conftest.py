"""Test configuration and fixtures."""

import pytest

from teamdesk.config import EmailSettings


@pytest.fixture
def fast_email_settings() -> EmailSettings:
    """Email settings with the retry backoff disabled."""
    return EmailSettings(
        max_attempts=3,
        backoff_base_seconds=0,
        backoff_max_seconds=0,
    )
