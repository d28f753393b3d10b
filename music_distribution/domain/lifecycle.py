"""Release lifecycle state machine.

Pure functions that decide whether a release may move between statuses:

    (create) -> DRAFT | PROPOSED_DATE
    DRAFT          --add song-->      DRAFT
    DRAFT          --propose date-->  PROPOSED_DATE
    PROPOSED_DATE  --approve date-->  APPROVED
    APPROVED       --distribute-->    RELEASED
    RELEASED       --withdraw-->      WITHDRAWN   (terminal)

Guards raise from ``music_distribution.domain.errors`` and never touch
storage. Status and action dispatch uses exhaustive ``match`` statements
closed with ``assert_never``; pyright (configured in ``pyproject.toml``)
reports any new status or action that one of them does not handle.
"""

from datetime import date
from enum import StrEnum
from typing import assert_never

from .entities import Artist, RecordLabelId, Release, ReleaseStatus, Song
from .errors import (
    InvalidArgumentError,
    InvalidStateError,
    PolicyViolationError,
    UnlabeledArtistError,
)


class ReleaseAction(StrEnum):
    """Operations that act on an existing release."""

    ADD_SONG = "add_song"
    PROPOSE_DATE = "propose_date"
    APPROVE_DATE = "approve_date"
    DISTRIBUTE = "distribute"
    WITHDRAW = "withdraw"


def required_status(action: ReleaseAction) -> ReleaseStatus:
    """Status a release must be in for ``action`` to apply."""
    match action:
        case ReleaseAction.ADD_SONG | ReleaseAction.PROPOSE_DATE:
            return ReleaseStatus.DRAFT
        case ReleaseAction.APPROVE_DATE:
            return ReleaseStatus.PROPOSED_DATE
        case ReleaseAction.DISTRIBUTE:
            return ReleaseStatus.APPROVED
        case ReleaseAction.WITHDRAW:
            return ReleaseStatus.RELEASED
        case _:
            assert_never(action)


def target_status(action: ReleaseAction) -> ReleaseStatus:
    """Status a release ends up in after ``action`` succeeds."""
    match action:
        case ReleaseAction.ADD_SONG:
            return ReleaseStatus.DRAFT
        case ReleaseAction.PROPOSE_DATE:
            return ReleaseStatus.PROPOSED_DATE
        case ReleaseAction.APPROVE_DATE:
            return ReleaseStatus.APPROVED
        case ReleaseAction.DISTRIBUTE:
            return ReleaseStatus.RELEASED
        case ReleaseAction.WITHDRAW:
            return ReleaseStatus.WITHDRAWN
        case _:
            assert_never(action)


def allowed_actions(status: ReleaseStatus) -> frozenset[ReleaseAction]:
    """Actions that may be applied to a release in ``status``."""
    match status:
        case ReleaseStatus.DRAFT:
            return frozenset({ReleaseAction.ADD_SONG, ReleaseAction.PROPOSE_DATE})
        case ReleaseStatus.PROPOSED_DATE:
            return frozenset({ReleaseAction.APPROVE_DATE})
        case ReleaseStatus.APPROVED:
            return frozenset({ReleaseAction.DISTRIBUTE})
        case ReleaseStatus.RELEASED:
            return frozenset({ReleaseAction.WITHDRAW})
        case ReleaseStatus.WITHDRAWN:
            return frozenset()
        case _:
            assert_never(status)


def is_terminal(status: ReleaseStatus) -> bool:
    return not allowed_actions(status)


def initial_status(proposed_date: date | None) -> ReleaseStatus:
    """Status a newly created release starts in."""
    return ReleaseStatus.DRAFT if proposed_date is None else ReleaseStatus.PROPOSED_DATE


def rejection_message(action: ReleaseAction) -> str:
    """Why ``action`` was refused for a release in the wrong status."""
    match action:
        case ReleaseAction.ADD_SONG:
            return "Can only add songs to a draft release"
        case ReleaseAction.PROPOSE_DATE:
            return "Can only propose dates for draft releases"
        case ReleaseAction.APPROVE_DATE:
            return "Can only approve dates for releases with proposed dates"
        case ReleaseAction.DISTRIBUTE:
            return "Can only distribute approved releases"
        case ReleaseAction.WITHDRAW:
            return "Can only withdraw released releases"
        case _:
            assert_never(action)


def ensure_transition(release: Release, action: ReleaseAction) -> ReleaseStatus:
    """Check that ``action`` applies to ``release`` and return the next status.

    Raises:
        InvalidStateError: release is not in the status ``action`` requires
    """
    if action not in allowed_actions(release.status):
        raise InvalidStateError(
            f"{rejection_message(action)} "
            f"(release {release.id} is {release.status.value})"
        )
    return target_status(action)


# ─── Guards ─────────────────────────────────────────────────────


def ensure_songs_exist(requested: int, found: int) -> None:
    """Every requested song must exist (checked by count equality)."""
    if requested == 0:
        raise InvalidArgumentError("A release needs at least one song")
    if found != requested:
        raise InvalidArgumentError(
            f"Some of the songs to be added to the release were not found "
            f"({found} of {requested} exist)"
        )


def ensure_date_in_future(candidate: date, today: date, *, label: str) -> None:
    """Dates chosen for a release must be strictly after today."""
    if not candidate > today:
        raise InvalidArgumentError(
            f"{label} date must be in the future: {candidate.isoformat()} "
            f"is not after {today.isoformat()}"
        )


def ensure_song_belongs_to_artist(release: Release, song: Song) -> None:
    """A release may only contain songs of its own artist."""
    if song.artist_id != release.artist_id:
        raise InvalidArgumentError(
            f"Song {song.id} must belong to the same artist as release {release.id}"
        )


def ensure_label_may_approve(artist: Artist, record_label_id: RecordLabelId) -> None:
    """Only the label the artist is bound to may approve a release date.

    Raises:
        UnlabeledArtistError: the artist has no label at all
        PolicyViolationError: the approving label is not the artist's label
    """
    if not artist.is_labeled:
        raise UnlabeledArtistError(artist.id)
    if artist.record_label_id != record_label_id:
        raise PolicyViolationError(
            f"Record label {record_label_id} can only approve releases for its "
            f"own artists; artist {artist.id} is signed to {artist.record_label_id}"
        )


def ensure_release_date_reached(release: Release, today: date) -> date:
    """An approved release is distributable on or after its approved date."""
    actual = release.actual_release_date
    if actual is None:
        raise InvalidStateError(f"Release {release.id} has no approved release date")
    if actual > today:
        raise InvalidStateError(
            f"Release date {actual.isoformat()} has not been reached yet "
            f"(today is {today.isoformat()})"
        )
    return actual
