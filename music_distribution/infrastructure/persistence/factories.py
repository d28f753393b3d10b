"""Wiring for a fully in-memory distribution service."""

from attrs import define

from music_distribution.application.services import (
    MusicDistributionService,
    default_monetization_policy,
    default_payment_calculator,
)
from music_distribution.config import settings
from music_distribution.domain.monetization import MonetizationPolicy, PaymentCalculator
from music_distribution.domain.repositories import ClockProtocol, IdGeneratorProtocol
from music_distribution.infrastructure.services import SystemClock, UuidIdGenerator

from .in_memory import (
    InMemoryArtistRepository,
    InMemoryDatabase,
    InMemoryPaymentRepository,
    InMemoryReleaseRepository,
    InMemorySongRepository,
    InMemoryStreamRepository,
    InMemoryTransactionManager,
)


@define(frozen=True, slots=True)
class InMemoryRepositories:
    """The repositories behind one in-memory service, for seeding and inspection."""

    database: InMemoryDatabase
    artists: InMemoryArtistRepository
    songs: InMemorySongRepository
    releases: InMemoryReleaseRepository
    streams: InMemoryStreamRepository
    payments: InMemoryPaymentRepository


def build_in_memory_repositories(
    database: InMemoryDatabase | None = None,
    id_generator: IdGeneratorProtocol | None = None,
) -> InMemoryRepositories:
    database = database if database is not None else InMemoryDatabase()
    id_generator = id_generator if id_generator is not None else UuidIdGenerator()
    return InMemoryRepositories(
        database=database,
        artists=InMemoryArtistRepository(database),
        songs=InMemorySongRepository(database),
        releases=InMemoryReleaseRepository(database, id_generator),
        streams=InMemoryStreamRepository(database),
        payments=InMemoryPaymentRepository(database),
    )


def build_in_memory_service(
    database: InMemoryDatabase | None = None,
    *,
    clock: ClockProtocol | None = None,
    id_generator: IdGeneratorProtocol | None = None,
    monetization_policy: MonetizationPolicy | None = None,
    payment_calculator: PaymentCalculator | None = None,
) -> tuple[MusicDistributionService, InMemoryRepositories]:
    """Create a service over fresh (or given) in-memory storage.

    Unset policies come from ``settings.monetization``; unset clock and ID
    generator default to the system clock and random UUIDs.

    Returns:
        The service and the repositories it writes to
    """
    id_generator = id_generator if id_generator is not None else UuidIdGenerator()
    repositories = build_in_memory_repositories(database, id_generator)
    service = MusicDistributionService(
        artist_repository=repositories.artists,
        song_repository=repositories.songs,
        release_repository=repositories.releases,
        stream_repository=repositories.streams,
        payment_repository=repositories.payments,
        clock=clock if clock is not None else SystemClock(),
        id_generator=id_generator,
        transactions=InMemoryTransactionManager(repositories.database),
        monetization_policy=(
            monetization_policy
            if monetization_policy is not None
            else default_monetization_policy()
        ),
        payment_calculator=(
            payment_calculator
            if payment_calculator is not None
            else default_payment_calculator()
        ),
        sort_search_by_distance=settings.search.sort_by_distance,
    )
    return service, repositories
