"""Test harness for unit and integration tests.

Integration tests assume a PostgreSQL database with the schema applied
(``python scripts/run_migrations.py``). Settings are loaded from environment
variables (configure via .env or export).
"""

import pytest_asyncio

from teamdesk.domain.service import EmailDispatcher
from teamdesk.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Drains background email deliveries and closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_invite(unit_env):
            service = await unit_env.get(InvitationService)
            issued = await service.invite("Ann", "ann@example.com", "TEAM")
            assert issued.token
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        dispatcher = await container.get(EmailDispatcher)
        await dispatcher.drain()
        await container.close()

    return _test_environment
