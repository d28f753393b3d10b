"""Catalog entities: artists, record labels and songs.

Songs are created by a separate process; releases only reference them.
"""

from attrs import define, field

from .identifiers import ArtistId, RecordLabelId, SongId
from .shared import instance_of, non_blank, optional_instance_of, positive


@define(frozen=True, slots=True)
class RecordLabel:
    """A record label that signs artists and approves their release dates."""

    id: RecordLabelId = field(validator=instance_of(RecordLabelId))
    name: str = field(validator=non_blank)


@define(frozen=True, slots=True)
class Artist:
    """A performing artist, optionally bound to a record label."""

    id: ArtistId = field(validator=instance_of(ArtistId))
    name: str = field(validator=non_blank)
    record_label_id: RecordLabelId | None = field(
        default=None, validator=optional_instance_of(RecordLabelId)
    )

    @property
    def is_labeled(self) -> bool:
        return self.record_label_id is not None


@define(frozen=True, slots=True)
class Song:
    """Immutable song owned by a single artist."""

    id: SongId = field(validator=instance_of(SongId))
    title: str = field(validator=non_blank)
    artist_id: ArtistId = field(validator=instance_of(ArtistId))
    duration_seconds: int = field(validator=[instance_of(int), positive])
