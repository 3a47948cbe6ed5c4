"""PostgreSQL repository implementations."""

from teamdesk.persistence.repository.collection import PostgresCollectionStore
from teamdesk.persistence.repository.user import PostgresUserRepository
from teamdesk.persistence.repository.verification import (
    PostgresVerificationRepository,
)

__all__ = [
    "PostgresCollectionStore",
    "PostgresUserRepository",
    "PostgresVerificationRepository",
]
