"""Tests for the in-memory repositories backing unit tests."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.value import Email, Role, UserId, VerificationStatus
from teamdesk.persistence.repository.inmemory import (
    InMemoryCollectionStore,
    InMemoryDatabase,
    InMemoryUserRepository,
    InMemoryVerificationRepository,
)
from tests.factories import make_user, make_verification


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


class TestInMemoryVerificationRepository:
    @pytest.mark.asyncio
    async def test_upsert_replaces_pending_in_place(self, database):
        repo = InMemoryVerificationRepository(database)
        first = await repo.upsert_pending(make_verification("a@example.com", token="one"))

        second = await repo.upsert_pending(make_verification("a@example.com", token="two"))

        assert second.id == first.id
        assert len(database.verifications) == 1
        assert database.verifications[0].token.root == "two"

    @pytest.mark.asyncio
    async def test_upsert_after_consume_adds_new_row(self, database):
        repo = InMemoryVerificationRepository(database)
        first = await repo.upsert_pending(make_verification("a@example.com", token="one"))
        await repo.mark_consumed(first.token, datetime.now(timezone.utc), UserId(uuid4()))

        await repo.upsert_pending(make_verification("a@example.com", token="two"))

        statuses = sorted(v.status.value for v in database.verifications)
        assert statuses == ["consumed", "pending"]

    @pytest.mark.asyncio
    async def test_mark_consumed_only_once(self, database):
        repo = InMemoryVerificationRepository(database)
        stored = await repo.upsert_pending(make_verification("a@example.com"))
        now = datetime.now(timezone.utc)

        first = await repo.mark_consumed(stored.token, now, UserId(uuid4()))
        second = await repo.mark_consumed(stored.token, now, UserId(uuid4()))

        assert first.status == VerificationStatus.CONSUMED
        assert second is None


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_email_is_unique(self, database):
        repo = InMemoryUserRepository(database)
        await repo.save(make_user("a@example.com"))

        with pytest.raises(PersistenceError):
            await repo.save(make_user("A@example.com"))

    @pytest.mark.asyncio
    async def test_delete_except_role(self, database):
        repo = InMemoryUserRepository(database)
        await repo.save(make_user("root@example.com", role=Role.ADMIN))
        await repo.save(make_user("b@example.com", role=Role.CLIENT))

        assert await repo.delete_except_role(Role.ADMIN) == 1
        assert await repo.find_by_email(Email("b@example.com")) is None


class TestInMemoryCollectionStore:
    @pytest.mark.asyncio
    async def test_missing_collection_raises(self, database):
        store = InMemoryCollectionStore(database)
        database.drop_collection("docs")

        with pytest.raises(PersistenceError):
            await store.delete_all("docs")
