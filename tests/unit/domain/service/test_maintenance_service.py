"""Unit tests for MaintenanceService."""

import pytest
from sqlalchemy.exc import OperationalError

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.repository import (
    CollectionStore,
    UserRepository,
    VerificationRepository,
)
from teamdesk.domain.service import DEPENDENT_COLLECTIONS, MaintenanceService
from teamdesk.domain.value import Role
from teamdesk.persistence.repository import PostgresUserRepository
from teamdesk.persistence.repository.inmemory import (
    InMemoryCollectionStore,
    InMemoryDatabase,
)
from tests.factories import make_user, make_verification
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_workspace(env) -> None:
    """One admin, five other users and records in every collection."""
    users = await env.get(UserRepository)
    verifications = await env.get(VerificationRepository)
    database = await env.get(InMemoryDatabase)

    await users.save(make_user("root@example.com", role=Role.ADMIN))
    for i in range(3):
        await users.save(make_user(f"team{i}@example.com", role=Role.TEAM))
    await users.save(make_user("client@example.com", role=Role.CLIENT))
    await users.save(make_user("pending@example.com", role=Role.TEAM, active=False))

    await verifications.upsert_pending(make_verification("new@example.com"))
    for collection in DEPENDENT_COLLECTIONS:
        if collection != "verifications":
            database.insert(collection, {"id": collection})
            database.insert(collection, {"id": f"{collection}-2"})


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_keeps_only_admins(self, unit_env):
        await seed_workspace(unit_env)
        service = await unit_env.get(MaintenanceService)
        users = await unit_env.get(UserRepository)

        report = await service.reset()

        remaining = await users.list_all()
        assert [u.email.root for u in remaining] == ["root@example.com"]
        assert report.users_deleted == 5
        assert report.ok

    @pytest.mark.asyncio
    async def test_reset_empties_every_collection(self, unit_env):
        await seed_workspace(unit_env)
        service = await unit_env.get(MaintenanceService)
        store = await unit_env.get(CollectionStore)

        report = await service.reset()

        for collection in DEPENDENT_COLLECTIONS:
            assert await store.count(collection) == 0
        assert report.deleted["verifications"] == 1
        assert report.deleted["clients"] == 2
        assert report.total_deleted == 5 + 1 + 2 * 8
        assert report.finished_at is not None

    @pytest.mark.asyncio
    async def test_reset_is_idempotent(self, unit_env):
        await seed_workspace(unit_env)
        service = await unit_env.get(MaintenanceService)

        await service.reset()
        second = await service.reset()

        assert second.ok
        assert set(second.deleted) == {"users", *DEPENDENT_COLLECTIONS}
        assert all(count == 0 for count in second.deleted.values())

    @pytest.mark.asyncio
    async def test_reset_on_empty_store(self, unit_env):
        service = await unit_env.get(MaintenanceService)

        report = await service.reset()

        assert report.total_deleted == 0
        assert report.ok

    @pytest.mark.asyncio
    async def test_failing_collection_does_not_stop_the_rest(self, unit_env):
        await seed_workspace(unit_env)
        database = await unit_env.get(InMemoryDatabase)
        database.drop_collection("invoices")
        service = await unit_env.get(MaintenanceService)
        store = await unit_env.get(CollectionStore)

        report = await service.reset()

        assert not report.ok
        assert "invoices" in report.failures
        assert "invoices" not in report.deleted
        # Collections after the failing one are still cleared
        for collection in ("verifications", "conversations", "messages", "docs", "activities"):
            assert await store.count(collection) == 0
        assert report.users_deleted == 5


class _Savepoint:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class LockedUsersSession:
    """Session stand-in whose statements fail as if the users table were locked."""

    def __init__(self) -> None:
        self.executed = 0

    def begin_nested(self) -> _Savepoint:
        return _Savepoint()

    async def execute(self, stmt):
        self.executed += 1
        raise OperationalError("DELETE FROM users", {}, Exception("relation users is locked"))


class TestUsersPhaseFailure:
    @pytest.mark.asyncio
    async def test_delete_except_role_raises_persistence_error(self):
        repository = PostgresUserRepository(LockedUsersSession())

        with pytest.raises(PersistenceError) as excinfo:
            await repository.delete_except_role(Role.ADMIN)

        assert excinfo.value.collection == "users"
        assert "locked" in excinfo.value.reason

    @pytest.mark.asyncio
    async def test_users_failure_is_reported_and_collections_still_cleared(self, unit_env):
        await seed_workspace(unit_env)
        database = await unit_env.get(InMemoryDatabase)
        store = InMemoryCollectionStore(database)
        session = LockedUsersSession()
        service = MaintenanceService(PostgresUserRepository(session), store)

        report = await service.reset()

        assert session.executed == 1
        assert not report.ok
        assert "users" in report.failures
        assert "locked" in report.failures["users"]
        assert report.users_deleted == 0
        assert report.deleted["verifications"] == 1
        for collection in DEPENDENT_COLLECTIONS:
            assert await store.count(collection) == 0
        # Users were never touched
        assert len(database.users) == 6
