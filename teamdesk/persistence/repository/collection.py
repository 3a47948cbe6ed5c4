"""PostgreSQL implementation of the collection store."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.repository import CollectionStore
from teamdesk.persistence.tables import COLLECTION_TABLES


class PostgresCollectionStore(CollectionStore):
    """Bulk operations over the dependent workspace tables."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _table(self, collection: str):
        table = COLLECTION_TABLES.get(collection)
        if table is None:
            raise PersistenceError(collection, "unknown collection")
        return table

    async def delete_all(self, collection: str) -> int:
        """Delete every row of a collection inside its own savepoint.

        A failing collection rolls back to the savepoint only, leaving the
        surrounding transaction usable for the next one.
        """
        table = self._table(collection)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(delete(table))
        except SQLAlchemyError as e:
            raise PersistenceError(collection, str(getattr(e, "orig", None) or e)) from e
        return result.rowcount or 0

    async def count(self, collection: str) -> int:
        """Count rows of a collection."""
        table = self._table(collection)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    select(func.count()).select_from(table)
                )
        except SQLAlchemyError as e:
            raise PersistenceError(collection, str(getattr(e, "orig", None) or e)) from e
        return result.scalar() or 0
