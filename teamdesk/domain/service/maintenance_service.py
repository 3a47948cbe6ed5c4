"""Workspace maintenance: admin-preserving reset.

The reset is irreversible and takes no locks. It assumes a quiet store
(maintenance window); concurrent writers may leave records behind.
"""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.model.common import utc_now
from teamdesk.domain.repository import CollectionStore, UserRepository
from teamdesk.domain.value import Role

from .base import Service

USERS_COLLECTION = "users"

# Cleared unconditionally, in this order
DEPENDENT_COLLECTIONS: tuple[str, ...] = (
    "clients",
    "projects",
    "tasks",
    "invoices",
    "verifications",
    "conversations",
    "messages",
    "docs",
    "activities",
)


class ResetReport(BaseModel):
    """Per-collection outcome of a reset."""

    deleted: dict[str, int] = Field(default_factory=dict)
    failures: dict[str, str] = Field(default_factory=dict)
    started_at: datetime
    finished_at: datetime | None = None

    @property
    def users_deleted(self) -> int:
        return self.deleted.get(USERS_COLLECTION, 0)

    @property
    def total_deleted(self) -> int:
        return sum(self.deleted.values())

    @property
    def ok(self) -> bool:
        return not self.failures


class MaintenanceService(Service):
    """Domain service for destructive maintenance operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        collection_store: CollectionStore,
        collections: tuple[str, ...] = DEPENDENT_COLLECTIONS,
    ) -> None:
        """Initialize maintenance service.

        Args:
            user_repository: User repository
            collection_store: Bulk access to dependent collections
            collections: Dependent collections cleared by the reset
        """
        self.user_repository = user_repository
        self.collection_store = collection_store
        self.collections = collections
        self._deleted_records = logfire.metric_counter(
            "maintenance_reset_deleted_records",
            unit="1",
            description="Records deleted by workspace resets",
        )

    async def reset(self) -> ResetReport:
        """Delete all non-admin data.

        Phase 1 removes every user whose role is not ADMIN. Phase 2 empties
        each dependent collection. A failure on one collection is logged
        and recorded in the report; the remaining collections still run.

        Returns:
            Report with deletion counts and failures per collection
        """
        report = ResetReport(started_at=utc_now())

        with logfire.span("maintenance_service.reset", collections=len(self.collections)):
            try:
                report.deleted[USERS_COLLECTION] = (
                    await self.user_repository.delete_except_role(Role.ADMIN)
                )
            except PersistenceError as e:
                self._record_failure(report, USERS_COLLECTION, e)

            for collection in self.collections:
                try:
                    report.deleted[collection] = await self.collection_store.delete_all(
                        collection
                    )
                except PersistenceError as e:
                    self._record_failure(report, collection, e)

            report.finished_at = utc_now()
            self._deleted_records.add(report.total_deleted)

            logfire.info(
                "Workspace reset finished",
                deleted=report.deleted,
                failures=report.failures,
                users_deleted=report.users_deleted,
            )
            return report

    @staticmethod
    def _record_failure(report: ResetReport, collection: str, error: PersistenceError) -> None:
        report.failures[collection] = error.reason
        logfire.error(
            "Reset skipped collection",
            collection=collection,
            error=error.reason,
        )
