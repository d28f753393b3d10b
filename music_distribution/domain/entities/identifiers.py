"""Nominal identifier and measure types.

Every identifier kind is its own frozen class over a UUID, so a SongId can
never stand in for an ArtistId: attrs equality requires identical classes.
Measures wrap a validated primitive (seconds, money, search text).
"""

from datetime import timedelta
from decimal import Decimal
from typing import Self
from uuid import UUID, uuid4

from attrs import define, field

from ..errors import DomainValidationError
from .shared import instance_of, non_blank, positive


@define(frozen=True, slots=True)
class Identifier:
    """Opaque, immutable entity identity."""

    value: UUID = field(validator=instance_of(UUID))

    @classmethod
    def generate(cls) -> Self:
        """Create a fresh random identifier of this kind."""
        return cls(uuid4())

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Build an identifier from its canonical string form."""
        try:
            return cls(UUID(raw))
        except (TypeError, ValueError, AttributeError) as e:
            raise DomainValidationError(cls.__name__, f"not a UUID: {raw!r}") from e

    def __str__(self) -> str:
        return str(self.value)


@define(frozen=True, slots=True)
class ArtistId(Identifier):
    """Identity of an artist."""


@define(frozen=True, slots=True)
class SongId(Identifier):
    """Identity of a song."""


@define(frozen=True, slots=True)
class ReleaseId(Identifier):
    """Identity of a release."""


@define(frozen=True, slots=True)
class RecordLabelId(Identifier):
    """Identity of a record label."""


@define(frozen=True, slots=True)
class StreamId(Identifier):
    """Identity of a single playback event."""


@define(frozen=True, slots=True, order=True)
class StreamDuration:
    """How long a stream played, in whole seconds."""

    seconds: int = field(validator=[instance_of(int), positive])

    @classmethod
    def from_timedelta(cls, duration: timedelta) -> Self:
        """Truncate a timedelta to whole seconds."""
        return cls(int(duration.total_seconds()))

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def __str__(self) -> str:
        return f"{self.seconds}s"


@define(frozen=True, slots=True, order=True)
class PaymentAmount:
    """Strictly positive amount of money owed to an artist."""

    value: Decimal = field(validator=[instance_of(Decimal), positive])

    def __str__(self) -> str:
        return str(self.value)


@define(frozen=True, slots=True)
class TitleQuery:
    """Free text used to look songs up by title."""

    value: str = field(validator=non_blank)

    def __str__(self) -> str:
        return self.value
