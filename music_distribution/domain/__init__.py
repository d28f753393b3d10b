"""Music distribution domain layer - entities, lifecycle rules and policies."""

from . import entities, errors, lifecycle, monetization, search
from .entities import (
    Artist,
    AudioStream,
    Monetized,
    Payment,
    RecordLabel,
    Release,
    ReleaseStatus,
    Song,
    StreamReport,
)
from .errors import (
    DomainValidationError,
    InvalidArgumentError,
    InvalidStateError,
    InvariantViolationError,
    MusicDistributionError,
    NotFoundError,
    PolicyViolationError,
    UnlabeledArtistError,
)
from .lifecycle import ReleaseAction
from .monetization import MonetizationPolicy, PaymentCalculator
from .search import SongMatch, search_songs, title_distance

__all__ = [
    # Modules
    "entities",
    "errors",
    "lifecycle",
    "monetization",
    "search",
    # Key domain types
    "Artist",
    "AudioStream",
    "Monetized",
    "Payment",
    "RecordLabel",
    "Release",
    "ReleaseAction",
    "ReleaseStatus",
    "Song",
    "StreamReport",
    # Policies
    "MonetizationPolicy",
    "PaymentCalculator",
    "SongMatch",
    "search_songs",
    "title_distance",
    # Errors
    "DomainValidationError",
    "InvalidArgumentError",
    "InvalidStateError",
    "InvariantViolationError",
    "MusicDistributionError",
    "NotFoundError",
    "PolicyViolationError",
    "UnlabeledArtistError",
]
