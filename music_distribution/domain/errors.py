"""Error hierarchy for every rejection a use case can produce.

Each error carries a stable ``code`` and an ``ErrorCategory`` so a host service
can map failures to its own transport (HTTP status, message envelope) without
inspecting messages.

Categories:
    - NOT_FOUND: a referenced artist, song or release does not exist
    - INVALID_STATE: the entity is not in a state that allows the operation
    - INVALID_ARGUMENT: the input itself is unacceptable
    - POLICY_VIOLATION: a business rule rejects an otherwise well-formed request
    - INVARIANT: a condition that can never hold; treated as fatal
"""

from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    """High-level error categories for routing and handling."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    INVALID_ARGUMENT = "invalid_argument"
    POLICY_VIOLATION = "policy_violation"
    INVARIANT = "invariant"


class MusicDistributionError(Exception):
    """Base exception for all music distribution failures."""

    code: str = "MUSIC_DISTRIBUTION_ERROR"
    category: ErrorCategory = ErrorCategory.INVARIANT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def is_expected(self) -> bool:
        """Whether this is a domain rejection rather than a programming error."""
        return self.category is not ErrorCategory.INVARIANT

    def as_dict(self) -> dict[str, Any]:
        """Flat representation for logging or transport envelopes."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
        }


# ─── Domain rejections ──────────────────────────────────────────


class NotFoundError(MusicDistributionError, LookupError):
    """A referenced entity does not exist."""

    code = "NOT_FOUND"
    category = ErrorCategory.NOT_FOUND

    def __init__(self, entity: str, identifier: Any) -> None:
        super().__init__(f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class InvalidStateError(MusicDistributionError):
    """The operation is not valid for the entity's current state."""

    code = "INVALID_STATE"
    category = ErrorCategory.INVALID_STATE


class InvalidArgumentError(MusicDistributionError, ValueError):
    """The request is structurally invalid and cannot succeed as given."""

    code = "INVALID_ARGUMENT"
    category = ErrorCategory.INVALID_ARGUMENT


class DomainValidationError(InvalidArgumentError):
    """A value object or entity was constructed with an invalid value."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class PolicyViolationError(MusicDistributionError):
    """A business rule rejects the request."""

    code = "POLICY_VIOLATION"
    category = ErrorCategory.POLICY_VIOLATION


class UnlabeledArtistError(PolicyViolationError):
    """Release approval was requested for an artist without a record label."""

    code = "UNLABELED_ARTIST"

    def __init__(self, artist_id: Any) -> None:
        super().__init__(
            f"Artist {artist_id} has no record label; "
            "release approval for unlabeled artists is not supported"
        )
        self.artist_id = artist_id


# ─── Fatal ──────────────────────────────────────────────────────


class InvariantViolationError(MusicDistributionError, RuntimeError):
    """A guaranteed condition failed. Never expected in a correct program."""

    code = "INVARIANT_VIOLATION"
    category = ErrorCategory.INVARIANT
