"""Clock implementations.

``SystemClock`` reads wall time in UTC. ``FixedClock`` holds a settable
instant, for hosts that replay events and for tests.
"""

from datetime import UTC, date, datetime, timedelta

from attrs import define, field

from music_distribution.domain.entities import ensure_utc


class SystemClock:
    """Current UTC date and time."""

    async def current_date(self) -> date:
        return datetime.now(UTC).date()

    async def current_timestamp(self) -> datetime:
        return datetime.now(UTC)


@define(slots=True)
class FixedClock:
    """Clock frozen at ``now`` until moved explicitly.

    Naive datetimes are taken to be UTC.
    """

    now: datetime = field(converter=ensure_utc)

    @classmethod
    def on(cls, day: date) -> "FixedClock":
        """Clock set to midnight UTC of ``day``."""
        return cls(datetime(day.year, day.month, day.day, tzinfo=UTC))

    async def current_date(self) -> date:
        return self.now.date()

    async def current_timestamp(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta

    def set_date(self, day: date) -> None:
        """Jump to midnight UTC of ``day``."""
        self.now = datetime(day.year, day.month, day.day, tzinfo=UTC)
