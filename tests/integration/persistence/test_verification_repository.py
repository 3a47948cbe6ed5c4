"""Integration tests for the PostgreSQL repositories.

Require a PostgreSQL database with migrations applied:

    python scripts/run_migrations.py
    pytest -m integration
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from teamdesk.domain.repository import UserRepository, VerificationRepository
from teamdesk.domain.service import InvitationService
from teamdesk.domain.value import Email, Role, UserId, VerificationStatus
from tests.factories import make_verification
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def unique_email() -> str:
    return f"it-{uuid4().hex[:12]}@example.com"


class TestPostgresVerificationRepository:
    @pytest.mark.asyncio
    async def test_upsert_keeps_single_pending_row(self, integration_env):
        repo = await integration_env.get(VerificationRepository)
        email = unique_email()

        first = await repo.upsert_pending(make_verification(email))
        second = await repo.upsert_pending(make_verification(email, role=Role.CLIENT))

        assert second.id == first.id
        assert second.role == Role.CLIENT
        rows = await repo.find_by_email(Email(email))
        assert len(rows) == 1
        assert await repo.find_by_token(first.token) is None

    @pytest.mark.asyncio
    async def test_mark_consumed_is_conditional(self, integration_env):
        repo = await integration_env.get(VerificationRepository)
        stored = await repo.upsert_pending(make_verification(unique_email()))
        now = datetime.now(timezone.utc)
        user_id = UserId(uuid4())

        first = await repo.mark_consumed(stored.token, now, user_id)
        second = await repo.mark_consumed(stored.token, now, UserId(uuid4()))

        assert first.status == VerificationStatus.CONSUMED
        assert first.consumed_by_user_id == user_id
        assert second is None

    @pytest.mark.asyncio
    async def test_timestamps_round_trip_timezone_aware(self, integration_env):
        repo = await integration_env.get(VerificationRepository)
        stored = await repo.upsert_pending(
            make_verification(unique_email(), expires_in=timedelta(hours=1))
        )

        found = await repo.find_by_token(stored.token)

        assert found.expires_at.tzinfo is not None
        assert found.expires_at == stored.expires_at


class TestPostgresInvitationFlow:
    @pytest.mark.asyncio
    async def test_invite_and_consume(self, integration_env):
        service = await integration_env.get(InvitationService)
        users = await integration_env.get(UserRepository)
        email = unique_email()

        issued = await service.invite("It", email, Role.TEAM, {"timeline": True})
        user = await service.consume(issued.token)

        stored = await users.find_by_email(Email(email))
        assert stored == user
        assert stored.permissions.timeline is True
