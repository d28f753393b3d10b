"""Streaming and payout entities.

Pure stream/payment representations with no dependencies beyond attrs.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Self

from attrs import define, field

from ..errors import DomainValidationError
from .identifiers import ArtistId, PaymentAmount, SongId, StreamDuration, StreamId
from .shared import instance_of, require_utc


class Monetized(Enum):
    """Whether a stream counts toward artist revenue.

    Two-valued rather than a bare bool so call sites read unambiguously.
    """

    YES = "yes"
    NO = "no"

    @classmethod
    def from_bool(cls, value: bool) -> Self:
        return cls.YES if value else cls.NO

    @property
    def as_bool(self) -> bool:
        return self is Monetized.YES


@define(frozen=True, slots=True)
class AudioStream:
    """Immutable record of one playback of a song."""

    id: StreamId = field(validator=instance_of(StreamId))
    song_id: SongId = field(validator=instance_of(SongId))
    duration: StreamDuration = field(validator=instance_of(StreamDuration))
    timestamp: datetime = field(converter=require_utc)
    monetized: Monetized = field(validator=instance_of(Monetized))

    @property
    def is_monetized(self) -> bool:
        return self.monetized.as_bool


def _stream_ids(value: Iterable[StreamId]) -> tuple[StreamId, ...]:
    return tuple(dict.fromkeys(value))


def _validate_stream_ids(instance, attribute, value: tuple[StreamId, ...]) -> None:
    if not value:
        raise DomainValidationError(attribute.name, "a payment must cover at least one stream")
    if not all(isinstance(stream_id, StreamId) for stream_id in value):
        raise DomainValidationError(attribute.name, "expected StreamId values")


@define(frozen=True, slots=True)
class Payment:
    """Immutable payout to an artist covering a set of monetized streams."""

    artist_id: ArtistId = field(validator=instance_of(ArtistId))
    amount: PaymentAmount = field(validator=instance_of(PaymentAmount))
    paid_at: datetime = field(converter=require_utc)
    stream_ids: tuple[StreamId, ...] = field(
        converter=_stream_ids, validator=_validate_stream_ids
    )

    @property
    def stream_count(self) -> int:
        return len(self.stream_ids)


@define(frozen=True, slots=True)
class StreamReport:
    """On-demand split of an artist's streams by monetization. Never persisted."""

    monetized_streams: tuple[AudioStream, ...] = field(factory=tuple, converter=tuple)
    non_monetized_streams: tuple[AudioStream, ...] = field(
        factory=tuple, converter=tuple
    )

    @classmethod
    def from_streams(cls, streams: Iterable[AudioStream]) -> Self:
        """Partition streams, keeping their original order within each side."""
        monetized: list[AudioStream] = []
        non_monetized: list[AudioStream] = []
        for stream in streams:
            (monetized if stream.is_monetized else non_monetized).append(stream)
        return cls(monetized_streams=monetized, non_monetized_streams=non_monetized)

    @property
    def monetized_count(self) -> int:
        return len(self.monetized_streams)

    @property
    def non_monetized_count(self) -> int:
        return len(self.non_monetized_streams)

    @property
    def total_count(self) -> int:
        return self.monetized_count + self.non_monetized_count
