"""In-memory persistence for the distribution workflows.

All repositories share one ``InMemoryDatabase``. Entities are immutable, so
a transaction snapshot is a shallow copy of each table; leaving a transaction
with an exception restores the snapshot. Transactions are serialized by a
single lock, which makes every use case linearizable against this store.
"""

import asyncio
from collections.abc import AsyncIterator, Collection
from contextlib import asynccontextmanager
from datetime import date

from attrs import define, field

from music_distribution.config import get_logger
from music_distribution.domain.entities import (
    Artist,
    ArtistId,
    AudioStream,
    Payment,
    Release,
    ReleaseId,
    ReleaseStatus,
    Song,
    SongId,
    StreamId,
)
from music_distribution.domain.errors import InvariantViolationError, NotFoundError
from music_distribution.domain.lifecycle import initial_status
from music_distribution.domain.repositories import IdGeneratorProtocol

logger = get_logger(__name__)


@define(slots=True)
class InMemoryDatabase:
    """Tables keyed by identity, in insertion order."""

    artists: dict[ArtistId, Artist] = field(factory=dict)
    songs: dict[SongId, Song] = field(factory=dict)
    releases: dict[ReleaseId, Release] = field(factory=dict)
    streams: dict[StreamId, AudioStream] = field(factory=dict)
    paid_stream_ids: set[StreamId] = field(factory=set)
    payments: list[Payment] = field(factory=list)
    _lock: asyncio.Lock = field(factory=asyncio.Lock, init=False, repr=False)

    def _snapshot(self) -> tuple:
        return (
            dict(self.artists),
            dict(self.songs),
            dict(self.releases),
            dict(self.streams),
            set(self.paid_stream_ids),
            list(self.payments),
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self.artists,
            self.songs,
            self.releases,
            self.streams,
            self.paid_stream_ids,
            self.payments,
        ) = snapshot

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit on normal exit, roll back every write on exception."""
        async with self._lock:
            snapshot = self._snapshot()
            try:
                yield
            except BaseException:
                self._restore(snapshot)
                logger.debug("In-memory transaction rolled back")
                raise

    def released_song_ids(self) -> set[SongId]:
        return {
            song_id
            for release in self.releases.values()
            if release.status is ReleaseStatus.RELEASED
            for song_id in release.song_ids
        }

    def song_ids_of_artist(self, artist_id: ArtistId) -> set[SongId]:
        return {song.id for song in self.songs.values() if song.artist_id == artist_id}


class InMemoryTransactionManager:
    """Transaction scopes over an ``InMemoryDatabase``."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database

    def begin(self):
        return self._database.transaction()


class InMemoryArtistRepository:
    """Artist storage."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, artist_id: ArtistId) -> Artist | None:
        return self._db.artists.get(artist_id)

    async def save(self, artist: Artist) -> None:
        self._db.artists[artist.id] = artist


class InMemorySongRepository:
    """Song storage; released means part of a RELEASED release."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, song_id: SongId) -> Song | None:
        return self._db.songs.get(song_id)

    async def count_existing(self, song_ids: Collection[SongId]) -> int:
        return sum(1 for song_id in set(song_ids) if song_id in self._db.songs)

    async def find_all_released(self) -> list[Song]:
        released = self._db.released_song_ids()
        return [song for song in self._db.songs.values() if song.id in released]

    async def is_released(self, song_id: SongId) -> bool:
        return song_id in self._db.released_song_ids()

    async def save(self, song: Song) -> None:
        self._db.songs[song.id] = song


class InMemoryReleaseRepository:
    """Release storage. New release IDs come from the injected generator."""

    def __init__(
        self, database: InMemoryDatabase, id_generator: IdGeneratorProtocol
    ) -> None:
        self._db = database
        self._id_generator = id_generator

    async def create(
        self,
        artist_id: ArtistId,
        song_ids: Collection[SongId],
        proposed_date: date | None = None,
    ) -> Release:
        release = Release(
            id=await self._id_generator.generate_release_id(),
            artist_id=artist_id,
            song_ids=song_ids,
            status=initial_status(proposed_date),
            proposed_release_date=proposed_date,
        )
        if release.id in self._db.releases:
            raise InvariantViolationError(f"Release ID {release.id} was reused")
        self._db.releases[release.id] = release
        return release

    async def find_by_id(self, release_id: ReleaseId) -> Release | None:
        return self._db.releases.get(release_id)

    async def add_song(self, release_id: ReleaseId, song_id: SongId) -> None:
        self._replace(self._require(release_id).with_song(song_id))

    async def transition_to_proposed(
        self, release_id: ReleaseId, proposed_date: date
    ) -> None:
        self._replace(self._require(release_id).with_proposed_date(proposed_date))

    async def transition_to_approved(
        self, release_id: ReleaseId, actual_date: date
    ) -> None:
        self._replace(self._require(release_id).approved(actual_date))

    async def transition_to_released(self, release_id: ReleaseId) -> None:
        self._replace(self._require(release_id).released())

    async def transition_to_withdrawn(self, release_id: ReleaseId) -> None:
        self._replace(self._require(release_id).withdrawn())

    def _require(self, release_id: ReleaseId) -> Release:
        release = self._db.releases.get(release_id)
        if release is None:
            raise NotFoundError("Release", release_id)
        return release

    def _replace(self, release: Release) -> None:
        self._db.releases[release.id] = release


class InMemoryStreamRepository:
    """Playback history, attributed to artists through song ownership."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def save(self, stream: AudioStream) -> None:
        if stream.id in self._db.streams:
            raise InvariantViolationError(f"Stream ID {stream.id} was reused")
        self._db.streams[stream.id] = stream

    async def list_by_artist(self, artist_id: ArtistId) -> list[AudioStream]:
        songs = self._db.song_ids_of_artist(artist_id)
        return [stream for stream in self._db.streams.values() if stream.song_id in songs]

    async def list_unpaid_monetized_by_artist(
        self, artist_id: ArtistId
    ) -> list[AudioStream]:
        return [
            stream
            for stream in await self.list_by_artist(artist_id)
            if stream.is_monetized and stream.id not in self._db.paid_stream_ids
        ]

    async def mark_paid(self, stream_ids: Collection[StreamId]) -> None:
        self._db.paid_stream_ids.update(stream_ids)

    def is_paid(self, stream_id: StreamId) -> bool:
        return stream_id in self._db.paid_stream_ids


class InMemoryPaymentRepository:
    """Append-only payment ledger."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def save(self, payment: Payment) -> None:
        self._db.payments.append(payment)

    def list_by_artist(self, artist_id: ArtistId) -> list[Payment]:
        return [payment for payment in self._db.payments if payment.artist_id == artist_id]
