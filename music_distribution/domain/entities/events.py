"""Domain events returned by each use case.

Events are immutable facts describing what happened. They are the return
value of an operation, not messages on a bus.
"""

from datetime import date

from attrs import define

from .identifiers import ArtistId, PaymentAmount, ReleaseId, SongId, StreamDuration, StreamId
from .release import ReleaseStatus
from .streaming import Monetized


@define(frozen=True, slots=True)
class ReleaseCreated:
    artist_id: ArtistId
    release_id: ReleaseId
    status: ReleaseStatus


@define(frozen=True, slots=True)
class SongAddedToRelease:
    release_id: ReleaseId
    song_id: SongId


@define(frozen=True, slots=True)
class ReleaseDateProposed:
    release_id: ReleaseId
    proposed_date: date


@define(frozen=True, slots=True)
class ReleaseDateApproved:
    release_id: ReleaseId
    approved_date: date


@define(frozen=True, slots=True)
class ReleaseDistributed:
    release_id: ReleaseId


@define(frozen=True, slots=True)
class SongStreamed:
    stream_id: StreamId
    song_id: SongId
    duration: StreamDuration
    monetized: Monetized


@define(frozen=True, slots=True)
class PaymentFiled:
    artist_id: ArtistId
    amount: PaymentAmount
    stream_ids: tuple[StreamId, ...]


@define(frozen=True, slots=True)
class ReleaseWithdrawn:
    release_id: ReleaseId


DomainEvent = (
    ReleaseCreated
    | SongAddedToRelease
    | ReleaseDateProposed
    | ReleaseDateApproved
    | ReleaseDistributed
    | SongStreamed
    | PaymentFiled
    | ReleaseWithdrawn
)
