"""Shared in-memory storage backing the in-memory repositories."""

from typing import Any

from teamdesk.domain.model import User, Verification
from teamdesk.domain.value import UserId

# Dependent collections held as plain records; verifications live in their own list
RECORD_COLLECTIONS = (
    "clients",
    "projects",
    "tasks",
    "invoices",
    "conversations",
    "messages",
    "docs",
    "activities",
)


class InMemoryDatabase:
    """Process-local stand-in for the database.

    Repositories built on the same instance see each other's writes.
    Mutations happen without awaiting, so each repository call is atomic
    with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.verifications: list[Verification] = []
        self.collections: dict[str, list[dict[str, Any]]] = {
            name: [] for name in RECORD_COLLECTIONS
        }

    def insert(self, collection: str, record: dict[str, Any]) -> None:
        """Add a record to a dependent collection (test seeding)."""
        self.collections.setdefault(collection, []).append(record)

    def drop_collection(self, collection: str) -> None:
        """Remove a collection entirely, as if it was never created."""
        self.collections.pop(collection, None)
