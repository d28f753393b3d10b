"""Core domain entities representing music distribution concepts."""

from .catalog import Artist, RecordLabel, Song
from .events import (
    DomainEvent,
    PaymentFiled,
    ReleaseCreated,
    ReleaseDateApproved,
    ReleaseDateProposed,
    ReleaseDistributed,
    ReleaseWithdrawn,
    SongAddedToRelease,
    SongStreamed,
)
from .identifiers import (
    ArtistId,
    Identifier,
    PaymentAmount,
    RecordLabelId,
    ReleaseId,
    SongId,
    StreamDuration,
    StreamId,
    TitleQuery,
)
from .release import DATED_STATUSES, Release, ReleaseStatus, unique_song_ids
from .shared import ensure_utc
from .streaming import AudioStream, Monetized, Payment, StreamReport

__all__ = [
    # Identifiers and measures
    "ArtistId",
    "Identifier",
    "PaymentAmount",
    "RecordLabelId",
    "ReleaseId",
    "SongId",
    "StreamDuration",
    "StreamId",
    "TitleQuery",
    # Catalog
    "Artist",
    "RecordLabel",
    "Song",
    # Releases
    "DATED_STATUSES",
    "Release",
    "ReleaseStatus",
    "unique_song_ids",
    # Streaming
    "AudioStream",
    "Monetized",
    "Payment",
    "StreamReport",
    # Events
    "DomainEvent",
    "PaymentFiled",
    "ReleaseCreated",
    "ReleaseDateApproved",
    "ReleaseDateProposed",
    "ReleaseDistributed",
    "ReleaseWithdrawn",
    "SongAddedToRelease",
    "SongStreamed",
    # Shared utilities
    "ensure_utc",
]
