"""Random UUID identifiers for every entity kind."""

from music_distribution.domain.entities import (
    ArtistId,
    RecordLabelId,
    ReleaseId,
    SongId,
    StreamId,
)


class UuidIdGenerator:
    """Fresh uuid4-backed identifiers; collisions are treated as impossible."""

    async def generate_stream_id(self) -> StreamId:
        return StreamId.generate()

    async def generate_release_id(self) -> ReleaseId:
        return ReleaseId.generate()

    async def generate_artist_id(self) -> ArtistId:
        return ArtistId.generate()

    async def generate_song_id(self) -> SongId:
        return SongId.generate()

    async def generate_record_label_id(self) -> RecordLabelId:
        return RecordLabelId.generate()
