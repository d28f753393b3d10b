"""In-memory persistence adapters."""

from .factories import (
    InMemoryRepositories,
    build_in_memory_repositories,
    build_in_memory_service,
)
from .in_memory import (
    InMemoryArtistRepository,
    InMemoryDatabase,
    InMemoryPaymentRepository,
    InMemoryReleaseRepository,
    InMemorySongRepository,
    InMemoryStreamRepository,
    InMemoryTransactionManager,
)

__all__ = [
    "InMemoryArtistRepository",
    "InMemoryDatabase",
    "InMemoryPaymentRepository",
    "InMemoryReleaseRepository",
    "InMemoryRepositories",
    "InMemorySongRepository",
    "InMemoryStreamRepository",
    "InMemoryTransactionManager",
    "build_in_memory_repositories",
    "build_in_memory_service",
]
