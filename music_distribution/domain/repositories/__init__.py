"""Collaborator interfaces the domain workflows depend on."""

from .interfaces import (
    ArtistRepositoryProtocol,
    ClockProtocol,
    IdGeneratorProtocol,
    PaymentRepositoryProtocol,
    ReleaseRepositoryProtocol,
    SongRepositoryProtocol,
    StreamRepositoryProtocol,
    TransactionManagerProtocol,
)

__all__ = [
    "ArtistRepositoryProtocol",
    "ClockProtocol",
    "IdGeneratorProtocol",
    "PaymentRepositoryProtocol",
    "ReleaseRepositoryProtocol",
    "SongRepositoryProtocol",
    "StreamRepositoryProtocol",
    "TransactionManagerProtocol",
]
