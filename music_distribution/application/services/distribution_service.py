"""Music distribution workflows.

``MusicDistributionService`` is the facade for every use case: releases
(create, add song, propose date, approve date, distribute, withdraw), song
search, stream recording and reporting, and artist payment.

Each use case follows the same shape:
1. read what it needs from collaborators (independent reads run concurrently)
2. run the domain guards, which raise on rejection
3. perform a single terminal write
4. return a domain event describing what happened

Every use case runs inside one transaction scope from the injected
``TransactionManagerProtocol``, so a failure after a write discards it.
Callers are assumed to be authenticated and authorized upstream.
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import date, timedelta

from attrs import define, field

from music_distribution.application.utilities.boundaries import use_case_boundary
from music_distribution.application.utilities.concurrency import fetch_concurrently
from music_distribution.config import get_logger, settings
from music_distribution.domain import lifecycle
from music_distribution.domain.entities import (
    Artist,
    ArtistId,
    AudioStream,
    Payment,
    PaymentFiled,
    RecordLabelId,
    Release,
    ReleaseCreated,
    ReleaseDateApproved,
    ReleaseDateProposed,
    ReleaseDistributed,
    ReleaseId,
    ReleaseWithdrawn,
    Song,
    SongAddedToRelease,
    SongId,
    SongStreamed,
    StreamDuration,
    StreamId,
    StreamReport,
    TitleQuery,
    unique_song_ids,
)
from music_distribution.domain.errors import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from music_distribution.domain.lifecycle import ReleaseAction
from music_distribution.domain.monetization import MonetizationPolicy, PaymentCalculator
from music_distribution.domain.repositories import (
    ArtistRepositoryProtocol,
    ClockProtocol,
    IdGeneratorProtocol,
    PaymentRepositoryProtocol,
    ReleaseRepositoryProtocol,
    SongRepositoryProtocol,
    StreamRepositoryProtocol,
    TransactionManagerProtocol,
)
from music_distribution.domain.search import search_songs, validate_threshold

logger = get_logger(__name__)


class NoTransactionManager:
    """Transaction manager for hosts that scope transactions themselves."""

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[None]:
        yield


def default_monetization_policy() -> MonetizationPolicy:
    return MonetizationPolicy(threshold_seconds=settings.monetization.threshold_seconds)


def default_payment_calculator() -> PaymentCalculator:
    return PaymentCalculator(rate_per_stream=settings.monetization.rate_per_stream)


@define(slots=True)
class MusicDistributionService:
    """Use case facade composed from injected collaborators."""

    artist_repository: ArtistRepositoryProtocol
    song_repository: SongRepositoryProtocol
    release_repository: ReleaseRepositoryProtocol
    stream_repository: StreamRepositoryProtocol
    payment_repository: PaymentRepositoryProtocol
    clock: ClockProtocol
    id_generator: IdGeneratorProtocol
    transactions: TransactionManagerProtocol = field(factory=NoTransactionManager)
    monetization_policy: MonetizationPolicy = field(factory=default_monetization_policy)
    payment_calculator: PaymentCalculator = field(factory=default_payment_calculator)
    sort_search_by_distance: bool = field(
        factory=lambda: settings.search.sort_by_distance
    )

    # ─── Releases ───────────────────────────────────────────────

    @use_case_boundary("create_release")
    async def create_release(
        self,
        artist_id: ArtistId,
        song_ids: Iterable[SongId],
        proposed_date: date | None = None,
    ) -> ReleaseCreated:
        """Create a release from existing songs, optionally with a proposed date."""
        requested = unique_song_ids(song_ids)
        if not requested:
            raise InvalidArgumentError("A release needs at least one song")

        async with self.transactions.begin():
            if proposed_date is None:
                found = await self.song_repository.count_existing(requested)
                lifecycle.ensure_songs_exist(len(requested), found)
            else:
                found, today = await fetch_concurrently(
                    self.song_repository.count_existing(requested),
                    self.clock.current_date(),
                )
                lifecycle.ensure_songs_exist(len(requested), found)
                lifecycle.ensure_date_in_future(proposed_date, today, label="Proposed")

            release = await self.release_repository.create(
                artist_id, requested, proposed_date
            )

        logger.info(
            "Release created",
            release_id=str(release.id),
            artist_id=str(artist_id),
            song_count=len(requested),
            status=release.status.value,
        )
        return ReleaseCreated(
            artist_id=artist_id, release_id=release.id, status=release.status
        )

    @use_case_boundary("add_song_to_release")
    async def add_song_to_release(
        self, release_id: ReleaseId, song_id: SongId
    ) -> SongAddedToRelease:
        """Add one of the artist's songs to a draft release."""
        async with self.transactions.begin():
            release, song = await fetch_concurrently(
                self._get_release(release_id), self._get_song(song_id)
            )
            lifecycle.ensure_song_belongs_to_artist(release, song)
            next_status = lifecycle.ensure_transition(release, ReleaseAction.ADD_SONG)
            if release.contains(song.id):
                raise InvalidArgumentError(
                    f"Song {song.id} is already part of release {release.id}"
                )

            await self.release_repository.add_song(release.id, song.id)

        logger.info(
            "Song added to release",
            release_id=str(release.id),
            song_id=str(song.id),
            from_status=release.status.value,
            to_status=next_status.value,
        )
        return SongAddedToRelease(release_id=release.id, song_id=song.id)

    @use_case_boundary("propose_release_date")
    async def propose_release_date(
        self, release_id: ReleaseId, proposed_date: date
    ) -> ReleaseDateProposed:
        """Artist proposes a future release date for a draft release."""
        async with self.transactions.begin():
            release, today = await fetch_concurrently(
                self._get_release(release_id), self.clock.current_date()
            )
            next_status = lifecycle.ensure_transition(release, ReleaseAction.PROPOSE_DATE)
            lifecycle.ensure_date_in_future(proposed_date, today, label="Proposed")

            await self.release_repository.transition_to_proposed(
                release.id, proposed_date
            )

        logger.info(
            "Release date proposed",
            release_id=str(release.id),
            proposed_date=proposed_date.isoformat(),
            from_status=release.status.value,
            to_status=next_status.value,
        )
        return ReleaseDateProposed(release_id=release.id, proposed_date=proposed_date)

    @use_case_boundary("approve_release_date")
    async def approve_release_date(
        self,
        record_label_id: RecordLabelId,
        release_id: ReleaseId,
        approved_date: date,
    ) -> ReleaseDateApproved:
        """The artist's record label approves the actual release date."""
        async with self.transactions.begin():
            release, today = await fetch_concurrently(
                self._get_release(release_id), self.clock.current_date()
            )
            next_status = lifecycle.ensure_transition(release, ReleaseAction.APPROVE_DATE)
            artist = await self._get_artist(release.artist_id)
            lifecycle.ensure_label_may_approve(artist, record_label_id)
            lifecycle.ensure_date_in_future(approved_date, today, label="Approved")

            await self.release_repository.transition_to_approved(
                release.id, approved_date
            )

        logger.info(
            "Release date approved",
            release_id=str(release.id),
            record_label_id=str(record_label_id),
            approved_date=approved_date.isoformat(),
            from_status=release.status.value,
            to_status=next_status.value,
        )
        return ReleaseDateApproved(release_id=release.id, approved_date=approved_date)

    @use_case_boundary("distribute_release")
    async def distribute_release(self, release_id: ReleaseId) -> ReleaseDistributed:
        """Release an approved release for streaming once its date is reached."""
        async with self.transactions.begin():
            release, today = await fetch_concurrently(
                self._get_release(release_id), self.clock.current_date()
            )
            next_status = lifecycle.ensure_transition(release, ReleaseAction.DISTRIBUTE)
            lifecycle.ensure_release_date_reached(release, today)

            await self.release_repository.transition_to_released(release.id)

        logger.info(
            "Release distributed",
            release_id=str(release.id),
            from_status=release.status.value,
            to_status=next_status.value,
        )
        return ReleaseDistributed(release_id=release.id)

    @use_case_boundary("withdraw_release")
    async def withdraw_release(self, release_id: ReleaseId) -> ReleaseWithdrawn:
        """Withdraw a released release from distribution."""
        async with self.transactions.begin():
            release = await self._get_release(release_id)
            next_status = lifecycle.ensure_transition(release, ReleaseAction.WITHDRAW)

            await self.release_repository.transition_to_withdrawn(release.id)

        logger.info(
            "Release withdrawn",
            release_id=str(release.id),
            from_status=release.status.value,
            to_status=next_status.value,
        )
        return ReleaseWithdrawn(release_id=release.id)

    # ─── Search ─────────────────────────────────────────────────

    @use_case_boundary("search_songs")
    async def search_songs(self, query: TitleQuery | str, threshold: int) -> list[Song]:
        """Released songs whose title is within ``threshold`` edits of ``query``."""
        title_query = query if isinstance(query, TitleQuery) else TitleQuery(query)
        validate_threshold(threshold)

        async with self.transactions.begin():
            candidates = await self.song_repository.find_all_released()

        matches = search_songs(
            candidates,
            title_query,
            threshold,
            sort_by_distance=self.sort_search_by_distance,
        )
        logger.debug(
            "Song search",
            query=title_query.value,
            threshold=threshold,
            candidates=len(candidates),
            matches=len(matches),
        )
        return matches

    # ─── Streams ────────────────────────────────────────────────

    @use_case_boundary("record_stream")
    async def record_stream_event(
        self, song_id: SongId, duration: StreamDuration | timedelta
    ) -> SongStreamed:
        """Record a playback of a released song and classify its monetization."""
        if isinstance(duration, timedelta):
            duration = StreamDuration.from_timedelta(duration)

        async with self.transactions.begin():
            if not await self.song_repository.is_released(song_id):
                raise InvalidStateError(
                    f"Song {song_id} was not released for streaming"
                )

            stream_id, now = await fetch_concurrently(
                self.id_generator.generate_stream_id(),
                self.clock.current_timestamp(),
            )
            stream = AudioStream(
                id=stream_id,
                song_id=song_id,
                duration=duration,
                timestamp=now,
                monetized=self.monetization_policy.classify(duration),
            )
            await self.stream_repository.save(stream)

        logger.debug(
            "Stream recorded",
            stream_id=str(stream.id),
            song_id=str(song_id),
            duration_seconds=duration.seconds,
            monetized=stream.monetized.value,
        )
        return SongStreamed(
            stream_id=stream.id,
            song_id=song_id,
            duration=duration,
            monetized=stream.monetized,
        )

    async def record_stream(
        self, song_id: SongId, duration: StreamDuration | timedelta
    ) -> StreamId:
        """Record a playback and return only the new stream's ID."""
        event = await self.record_stream_event(song_id, duration)
        return event.stream_id

    @use_case_boundary("get_stream_report")
    async def get_stream_report(self, artist_id: ArtistId) -> StreamReport:
        """Split all of an artist's streams into monetized and non-monetized."""
        async with self.transactions.begin():
            _, streams = await fetch_concurrently(
                self._get_artist(artist_id),
                self.stream_repository.list_by_artist(artist_id),
            )
        return StreamReport.from_streams(streams)

    # ─── Payments ───────────────────────────────────────────────

    @use_case_boundary("file_for_payment")
    async def file_for_payment(self, artist_id: ArtistId) -> PaymentFiled:
        """Pay an artist for every unpaid monetized stream.

        Saving the payment and marking its streams paid happen in the same
        transaction scope; if either fails, neither is kept.
        """
        async with self.transactions.begin():
            _, unpaid = await fetch_concurrently(
                self._get_artist(artist_id),
                self.stream_repository.list_unpaid_monetized_by_artist(artist_id),
            )
            stream_ids = tuple(dict.fromkeys(stream.id for stream in unpaid))
            if not stream_ids:
                raise InvalidStateError(
                    f"No unpaid and monetized streams found for artist {artist_id}"
                )

            amount = self.payment_calculator.calculate(stream_ids)
            paid_at = await self.clock.current_timestamp()
            payment = Payment(
                artist_id=artist_id,
                amount=amount,
                paid_at=paid_at,
                stream_ids=stream_ids,
            )
            await self.payment_repository.save(payment)
            await self.stream_repository.mark_paid(payment.stream_ids)

        logger.info(
            "Payment filed",
            artist_id=str(artist_id),
            amount=str(amount),
            stream_count=payment.stream_count,
        )
        return PaymentFiled(
            artist_id=artist_id, amount=amount, stream_ids=payment.stream_ids
        )

    # ─── Lookups ────────────────────────────────────────────────

    async def _get_release(self, release_id: ReleaseId) -> Release:
        release = await self.release_repository.find_by_id(release_id)
        if release is None:
            raise NotFoundError("Release", release_id)
        return release

    async def _get_song(self, song_id: SongId) -> Song:
        song = await self.song_repository.find_by_id(song_id)
        if song is None:
            raise NotFoundError("Song", song_id)
        return song

    async def _get_artist(self, artist_id: ArtistId) -> Artist:
        artist = await self.artist_repository.find_by_id(artist_id)
        if artist is None:
            raise NotFoundError("Artist", artist_id)
        return artist
