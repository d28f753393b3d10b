"""Shared fixtures: a seeded in-memory distribution service on a fixed clock."""

from datetime import date, timedelta
from decimal import Decimal

from loguru import logger
import pytest

from music_distribution.domain.entities import (
    Artist,
    ArtistId,
    RecordLabel,
    RecordLabelId,
    Song,
    SongId,
)
from music_distribution.domain.monetization import MonetizationPolicy, PaymentCalculator
from music_distribution.infrastructure.persistence import build_in_memory_service
from music_distribution.infrastructure.services import FixedClock

TODAY = date(2024, 6, 1)
RATE = Decimal("0.003")


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock(today):
    """Clock pinned to midnight UTC of ``today``."""
    return FixedClock.on(today)


@pytest.fixture
def label():
    return RecordLabel(id=RecordLabelId.generate(), name="Warp Records")


@pytest.fixture
def artist(label):
    """Artist signed to ``label``."""
    return Artist(id=ArtistId.generate(), name="Aphex Twin", record_label_id=label.id)


@pytest.fixture
def unlabeled_artist():
    return Artist(id=ArtistId.generate(), name="Bedroom Producer")


@pytest.fixture
def songs(artist):
    """Three songs owned by ``artist``."""
    return [
        Song(id=SongId.generate(), title=title, artist_id=artist.id, duration_seconds=240)
        for title in ("Windowlicker", "Xtal", "Avril 14th")
    ]


@pytest.fixture
def other_song(unlabeled_artist):
    """A song owned by a different artist."""
    return Song(
        id=SongId.generate(),
        title="Shape",
        artist_id=unlabeled_artist.id,
        duration_seconds=180,
    )


@pytest.fixture
async def distribution(clock, artist, unlabeled_artist, songs, other_song):
    """In-memory service and repositories, seeded with both artists and their songs."""
    service, repositories = build_in_memory_service(
        clock=clock,
        monetization_policy=MonetizationPolicy(threshold_seconds=30),
        payment_calculator=PaymentCalculator(rate_per_stream=RATE),
    )
    for seeded_artist in (artist, unlabeled_artist):
        await repositories.artists.save(seeded_artist)
    for song in (*songs, other_song):
        await repositories.songs.save(song)
    return service, repositories


@pytest.fixture
def release_everything(distribution, clock, today, artist, label):
    """Drive a release through to RELEASED; the clock ends on the approved date."""
    service, _ = distribution

    async def _release(song_ids) -> object:
        created = await service.create_release(artist.id, song_ids)
        await service.propose_release_date(created.release_id, today + timedelta(days=7))
        approved_on = today + timedelta(days=10)
        await service.approve_release_date(label.id, created.release_id, approved_on)
        clock.set_date(approved_on)
        await service.distribute_release(created.release_id)
        return created.release_id

    return _release


@pytest.fixture
def log_records():
    """Capture loguru output as ``LEVEL|message`` strings."""
    records: list[str] = []
    handler_id = logger.add(
        lambda message: records.append(message.record["level"].name + "|" + message.record["message"]),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def log_extras():
    """Capture loguru records as ``(message, extra)`` pairs."""
    records: list[tuple[str, dict]] = []
    handler_id = logger.add(
        lambda message: records.append((message.record["message"], dict(message.record["extra"]))),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)
