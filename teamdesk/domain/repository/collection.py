"""Named collection store interface used by maintenance operations."""

from abc import ABC, abstractmethod


class CollectionStore(ABC):
    """Bulk operations over named record collections."""

    @abstractmethod
    async def delete_all(self, collection: str) -> int:
        """Delete every record in a collection.

        Args:
            collection: Collection (table) name

        Returns:
            Number of deleted records

        Raises:
            PersistenceError: If the collection cannot be accessed
        """
        pass

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Count records in a collection.

        Raises:
            PersistenceError: If the collection cannot be accessed
        """
        pass
