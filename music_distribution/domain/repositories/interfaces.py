"""Collaborator contracts consumed by the music distribution workflows.

These interfaces define data access, time and identity generation without
depending on any implementation. The workflows receive concrete collaborators
through their constructor; nothing is resolved globally.

Every call is assumed to be atomic and linearizable on its own. Locking,
isolation and optimistic concurrency are the implementation's responsibility.
"""

from collections.abc import Awaitable, Collection
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import date, datetime

    from music_distribution.domain.entities import (
        Artist,
        ArtistId,
        AudioStream,
        Payment,
        RecordLabelId,
        Release,
        ReleaseId,
        Song,
        SongId,
        StreamId,
    )


class ArtistRepositoryProtocol(Protocol):
    """Repository interface for artist persistence operations."""

    def find_by_id(self, artist_id: "ArtistId") -> Awaitable["Artist | None"]:
        """Find an artist by ID."""
        ...

    def save(self, artist: "Artist") -> Awaitable[None]:
        """Insert or replace an artist."""
        ...


class SongRepositoryProtocol(Protocol):
    """Repository interface for song persistence operations."""

    def find_by_id(self, song_id: "SongId") -> Awaitable["Song | None"]:
        """Find a song by ID."""
        ...

    def count_existing(self, song_ids: Collection["SongId"]) -> Awaitable[int]:
        """Count how many of the given (distinct) song IDs exist."""
        ...

    def find_all_released(self) -> Awaitable[list["Song"]]:
        """All songs that belong to at least one released release."""
        ...

    def is_released(self, song_id: "SongId") -> Awaitable[bool]:
        """Whether the song is currently released for streaming."""
        ...

    def save(self, song: "Song") -> Awaitable[None]:
        """Insert or replace a song."""
        ...


class ReleaseRepositoryProtocol(Protocol):
    """Repository interface for release persistence operations.

    Each ``transition_to_*`` method writes the new status together with the
    fields that status carries.
    """

    def create(
        self,
        artist_id: "ArtistId",
        song_ids: Collection["SongId"],
        proposed_date: "date | None" = None,
    ) -> Awaitable["Release"]:
        """Create a release; PROPOSED_DATE if a date is given, else DRAFT."""
        ...

    def find_by_id(self, release_id: "ReleaseId") -> Awaitable["Release | None"]:
        """Find a release by ID."""
        ...

    def add_song(self, release_id: "ReleaseId", song_id: "SongId") -> Awaitable[None]:
        """Append a song to the release's song list."""
        ...

    def transition_to_proposed(
        self, release_id: "ReleaseId", proposed_date: "date"
    ) -> Awaitable[None]:
        """Store the proposed date and move to PROPOSED_DATE."""
        ...

    def transition_to_approved(
        self, release_id: "ReleaseId", actual_date: "date"
    ) -> Awaitable[None]:
        """Store the approved date and move to APPROVED."""
        ...

    def transition_to_released(self, release_id: "ReleaseId") -> Awaitable[None]:
        """Move to RELEASED."""
        ...

    def transition_to_withdrawn(self, release_id: "ReleaseId") -> Awaitable[None]:
        """Move to WITHDRAWN."""
        ...


class StreamRepositoryProtocol(Protocol):
    """Repository interface for playback history operations."""

    def save(self, stream: "AudioStream") -> Awaitable[None]:
        """Persist a new stream."""
        ...

    def list_by_artist(self, artist_id: "ArtistId") -> Awaitable[list["AudioStream"]]:
        """All streams of songs owned by the artist."""
        ...

    def list_unpaid_monetized_by_artist(
        self, artist_id: "ArtistId"
    ) -> Awaitable[list["AudioStream"]]:
        """Monetized streams of the artist's songs not yet covered by a payment."""
        ...

    def mark_paid(self, stream_ids: Collection["StreamId"]) -> Awaitable[None]:
        """Flag the given streams as paid."""
        ...


class PaymentRepositoryProtocol(Protocol):
    """Repository interface for payment persistence operations."""

    def save(self, payment: "Payment") -> Awaitable[None]:
        """Persist a new payment."""
        ...


class ClockProtocol(Protocol):
    """Source of the current date and time."""

    def current_date(self) -> Awaitable["date"]:
        """Today's date."""
        ...

    def current_timestamp(self) -> Awaitable["datetime"]:
        """The current instant, timezone-aware."""
        ...


class IdGeneratorProtocol(Protocol):
    """Source of fresh, never reused identifiers."""

    def generate_stream_id(self) -> Awaitable["StreamId"]:
        ...

    def generate_release_id(self) -> Awaitable["ReleaseId"]:
        ...

    def generate_artist_id(self) -> Awaitable["ArtistId"]:
        ...

    def generate_song_id(self) -> Awaitable["SongId"]:
        ...

    def generate_record_label_id(self) -> Awaitable["RecordLabelId"]:
        ...


class TransactionManagerProtocol(Protocol):
    """Transaction boundary wrapped around each use case.

    Leaving the context normally commits; leaving it with an exception
    discards every write made inside it.
    """

    def begin(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction scope."""
        ...
