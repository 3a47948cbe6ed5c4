"""In-memory repository implementations for testing."""

from .collection import InMemoryCollectionStore
from .store import InMemoryDatabase
from .user import InMemoryUserRepository
from .verification import InMemoryVerificationRepository

__all__ = [
    "InMemoryCollectionStore",
    "InMemoryDatabase",
    "InMemoryUserRepository",
    "InMemoryVerificationRepository",
]
