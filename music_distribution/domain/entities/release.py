"""Release entity and its status.

A release bundles one or more songs of a single artist and moves through
DRAFT -> PROPOSED_DATE -> APPROVED -> RELEASED -> WITHDRAWN. The entity only
guarantees that its fields are consistent with its status; which moves are
allowed is decided by ``music_distribution.domain.lifecycle``.
"""

from collections.abc import Iterable
from datetime import date
from enum import StrEnum

import attrs
from attrs import define, field

from ..errors import DomainValidationError
from .identifiers import ArtistId, ReleaseId, SongId
from .shared import instance_of, optional_instance_of


class ReleaseStatus(StrEnum):
    """Lifecycle status of a release."""

    DRAFT = "draft"
    PROPOSED_DATE = "proposed_date"
    APPROVED = "approved"
    RELEASED = "released"
    WITHDRAWN = "withdrawn"


# Statuses in which the label-approved release date must be present
DATED_STATUSES = frozenset(
    {ReleaseStatus.APPROVED, ReleaseStatus.RELEASED, ReleaseStatus.WITHDRAWN}
)


def unique_song_ids(song_ids: Iterable[SongId]) -> tuple[SongId, ...]:
    """Collapse duplicates while keeping first-seen order."""
    return tuple(dict.fromkeys(song_ids))


def _validate_song_ids(instance, attribute, value: tuple[SongId, ...]) -> None:
    if not value:
        raise DomainValidationError(attribute.name, "a release needs at least one song")
    for song_id in value:
        if not isinstance(song_id, SongId):
            raise DomainValidationError(
                attribute.name, f"expected SongId, got {type(song_id).__name__}"
            )


@define(frozen=True, slots=True)
class Release:
    """Immutable snapshot of a release."""

    id: ReleaseId = field(validator=instance_of(ReleaseId))
    artist_id: ArtistId = field(validator=instance_of(ArtistId))
    song_ids: tuple[SongId, ...] = field(
        converter=unique_song_ids, validator=_validate_song_ids
    )
    status: ReleaseStatus = field(
        default=ReleaseStatus.DRAFT, converter=ReleaseStatus
    )
    proposed_release_date: date | None = field(
        default=None, validator=optional_instance_of(date)
    )
    actual_release_date: date | None = field(
        default=None, validator=optional_instance_of(date)
    )

    def __attrs_post_init__(self) -> None:
        if self.status is ReleaseStatus.DRAFT:
            if self.proposed_release_date is not None:
                raise DomainValidationError(
                    "proposed_release_date", "a draft release has no proposed date"
                )
        elif self.proposed_release_date is None:
            raise DomainValidationError(
                "proposed_release_date",
                f"required once a release is {self.status.value}",
            )

        dated = self.status in DATED_STATUSES
        if dated and self.actual_release_date is None:
            raise DomainValidationError(
                "actual_release_date", f"required once a release is {self.status.value}"
            )
        if not dated and self.actual_release_date is not None:
            raise DomainValidationError(
                "actual_release_date",
                f"must not be set while a release is {self.status.value}",
            )

    def contains(self, song_id: SongId) -> bool:
        return song_id in self.song_ids

    # Evolution helpers. Each returns a new release and re-runs validation;
    # whether the move is allowed is checked by the lifecycle guards.

    def with_song(self, song_id: SongId) -> "Release":
        return attrs.evolve(self, song_ids=(*self.song_ids, song_id))

    def with_proposed_date(self, proposed: date) -> "Release":
        return attrs.evolve(
            self, status=ReleaseStatus.PROPOSED_DATE, proposed_release_date=proposed
        )

    def approved(self, actual: date) -> "Release":
        return attrs.evolve(
            self, status=ReleaseStatus.APPROVED, actual_release_date=actual
        )

    def released(self) -> "Release":
        return attrs.evolve(self, status=ReleaseStatus.RELEASED)

    def withdrawn(self) -> "Release":
        return attrs.evolve(self, status=ReleaseStatus.WITHDRAWN)
