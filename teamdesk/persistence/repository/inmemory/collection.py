"""In-memory collection store for testing."""

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.repository.collection import CollectionStore

from .store import InMemoryDatabase


class InMemoryCollectionStore(CollectionStore):
    """In-memory implementation of CollectionStore for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def delete_all(self, collection: str) -> int:
        """Delete every record in a collection."""
        if collection == "verifications":
            deleted = len(self._db.verifications)
            self._db.verifications.clear()
            return deleted

        records = self._records(collection)
        deleted = len(records)
        records.clear()
        return deleted

    async def count(self, collection: str) -> int:
        """Count records in a collection."""
        if collection == "verifications":
            return len(self._db.verifications)
        return len(self._records(collection))

    def _records(self, collection: str) -> list:
        try:
            return self._db.collections[collection]
        except KeyError:
            raise PersistenceError(collection, "collection does not exist")
