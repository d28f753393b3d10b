"""Release lifecycle state machine and guard tests."""

from datetime import date, timedelta
from itertools import product
from pathlib import Path
import tomllib

import pytest

from music_distribution.domain import lifecycle
from music_distribution.domain.entities import (
    Artist,
    ArtistId,
    RecordLabelId,
    Release,
    ReleaseId,
    ReleaseStatus,
    Song,
    SongId,
)
from music_distribution.domain.errors import (
    InvalidArgumentError,
    InvalidStateError,
    PolicyViolationError,
    UnlabeledArtistError,
)
from music_distribution.domain.lifecycle import ReleaseAction

TODAY = date(2024, 6, 1)
PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"

LEGAL_MOVES = {
    (ReleaseStatus.DRAFT, ReleaseAction.ADD_SONG): ReleaseStatus.DRAFT,
    (ReleaseStatus.DRAFT, ReleaseAction.PROPOSE_DATE): ReleaseStatus.PROPOSED_DATE,
    (ReleaseStatus.PROPOSED_DATE, ReleaseAction.APPROVE_DATE): ReleaseStatus.APPROVED,
    (ReleaseStatus.APPROVED, ReleaseAction.DISTRIBUTE): ReleaseStatus.RELEASED,
    (ReleaseStatus.RELEASED, ReleaseAction.WITHDRAW): ReleaseStatus.WITHDRAWN,
}


def release_in(status: ReleaseStatus, artist_id: ArtistId | None = None) -> Release:
    """Build a consistent release snapshot for ``status``."""
    proposed = None if status is ReleaseStatus.DRAFT else TODAY + timedelta(days=7)
    actual = TODAY + timedelta(days=10) if status in (
        ReleaseStatus.APPROVED,
        ReleaseStatus.RELEASED,
        ReleaseStatus.WITHDRAWN,
    ) else None
    return Release(
        id=ReleaseId.generate(),
        artist_id=artist_id or ArtistId.generate(),
        song_ids=[SongId.generate()],
        status=status,
        proposed_release_date=proposed,
        actual_release_date=actual,
    )


class TestTransitionTable:
    """Every (status, action) pair is either a legal move or InvalidState."""

    @pytest.mark.parametrize(
        ("status", "action"), list(product(ReleaseStatus, ReleaseAction))
    )
    def test_every_pair(self, status, action):
        release = release_in(status)

        if (status, action) in LEGAL_MOVES:
            assert lifecycle.ensure_transition(release, action) is LEGAL_MOVES[(status, action)]
        else:
            with pytest.raises(InvalidStateError, match=status.value):
                lifecycle.ensure_transition(release, action)

    def test_withdrawn_is_the_only_terminal_status(self):
        terminal = [status for status in ReleaseStatus if lifecycle.is_terminal(status)]
        assert terminal == [ReleaseStatus.WITHDRAWN]

    def test_required_and_target_status_agree_with_table(self):
        for (status, action), target in LEGAL_MOVES.items():
            assert lifecycle.required_status(action) is status
            assert lifecycle.target_status(action) is target

    def test_initial_status(self):
        assert lifecycle.initial_status(None) is ReleaseStatus.DRAFT
        assert lifecycle.initial_status(TODAY) is ReleaseStatus.PROPOSED_DATE

    @pytest.mark.parametrize("action", list(ReleaseAction))
    def test_every_action_has_a_rejection_message(self, action):
        message = lifecycle.rejection_message(action)
        release = release_in(ReleaseStatus.WITHDRAWN)

        with pytest.raises(InvalidStateError) as exc_info:
            lifecycle.ensure_transition(release, action)
        assert exc_info.value.message.startswith(message)

    def test_match_exhaustiveness_is_a_type_error(self):
        """New statuses or actions must fail type checking, not only at runtime."""
        with PYPROJECT.open("rb") as f:
            pyright = tomllib.load(f)["tool"]["pyright"]

        assert pyright["reportMatchNotExhaustive"] == "error"
        assert "music_distribution" in pyright["include"]


class TestGuards:
    """Guards raise the documented error kinds."""

    def test_dates_must_be_strictly_in_the_future(self):
        lifecycle.ensure_date_in_future(TODAY + timedelta(days=1), TODAY, label="Proposed")

        with pytest.raises(InvalidArgumentError, match="Proposed date must be in the future"):
            lifecycle.ensure_date_in_future(TODAY, TODAY, label="Proposed")
        with pytest.raises(InvalidArgumentError):
            lifecycle.ensure_date_in_future(TODAY - timedelta(days=1), TODAY, label="Approved")

    def test_songs_must_all_exist(self):
        lifecycle.ensure_songs_exist(2, 2)

        with pytest.raises(InvalidArgumentError, match="not found"):
            lifecycle.ensure_songs_exist(2, 1)
        with pytest.raises(InvalidArgumentError, match="at least one song"):
            lifecycle.ensure_songs_exist(0, 0)

    def test_song_must_belong_to_release_artist(self):
        artist_id = ArtistId.generate()
        release = release_in(ReleaseStatus.DRAFT, artist_id)
        own = Song(id=SongId.generate(), title="Xtal", artist_id=artist_id, duration_seconds=200)
        foreign = Song(
            id=SongId.generate(), title="Xtal", artist_id=ArtistId.generate(), duration_seconds=200
        )

        lifecycle.ensure_song_belongs_to_artist(release, own)
        with pytest.raises(InvalidArgumentError, match="same artist"):
            lifecycle.ensure_song_belongs_to_artist(release, foreign)

    def test_only_the_artists_own_label_may_approve(self):
        label_id = RecordLabelId.generate()
        signed = Artist(id=ArtistId.generate(), name="Signed", record_label_id=label_id)

        lifecycle.ensure_label_may_approve(signed, label_id)
        with pytest.raises(PolicyViolationError, match="own artists"):
            lifecycle.ensure_label_may_approve(signed, RecordLabelId.generate())

    def test_unlabeled_artist_cannot_be_approved(self):
        unsigned = Artist(id=ArtistId.generate(), name="Unsigned")

        with pytest.raises(UnlabeledArtistError) as exc_info:
            lifecycle.ensure_label_may_approve(unsigned, RecordLabelId.generate())
        assert exc_info.value.artist_id == unsigned.id

    def test_release_date_reached_on_or_after_approved_date(self):
        release = release_in(ReleaseStatus.APPROVED)
        approved_on = release.actual_release_date

        assert lifecycle.ensure_release_date_reached(release, approved_on) == approved_on
        lifecycle.ensure_release_date_reached(release, approved_on + timedelta(days=3))
        with pytest.raises(InvalidStateError, match="not been reached"):
            lifecycle.ensure_release_date_reached(release, approved_on - timedelta(days=1))

    def test_release_date_reached_requires_a_date(self):
        with pytest.raises(InvalidStateError, match="no approved release date"):
            lifecycle.ensure_release_date_reached(release_in(ReleaseStatus.DRAFT), TODAY)
