"""Shared helpers for domain entities.

Pure utility functions and attrs validators with zero external dependencies
beyond attrs itself.
"""

from datetime import UTC, datetime
from typing import Any

from ..errors import DomainValidationError


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def require_utc(dt: datetime) -> datetime:
    """Converter for mandatory timestamp fields."""
    if not isinstance(dt, datetime):
        raise DomainValidationError("timestamp", f"expected datetime, got {dt!r}")
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def non_blank(instance: Any, attribute: Any, value: Any) -> None:
    """attrs validator: value must be a string with visible content."""
    if not isinstance(value, str) or not value.strip():
        raise DomainValidationError(attribute.name, "must be a non-blank string")


def instance_of(*types: type) -> Any:
    """attrs validator factory raising DomainValidationError on type mismatch."""

    def validator(instance: Any, attribute: Any, value: Any) -> None:
        # bool is an int subclass but never a valid measure or identifier
        if isinstance(value, bool) or not isinstance(value, types):
            expected = " | ".join(t.__name__ for t in types)
            raise DomainValidationError(
                attribute.name, f"expected {expected}, got {type(value).__name__}"
            )

    return validator


def optional_instance_of(*types: type) -> Any:
    """Like instance_of, but allows None."""
    inner = instance_of(*types)

    def validator(instance: Any, attribute: Any, value: Any) -> None:
        if value is not None:
            inner(instance, attribute, value)

    return validator


def positive(instance: Any, attribute: Any, value: Any) -> None:
    """attrs validator: numeric value must be strictly greater than zero."""
    if not value > 0:
        raise DomainValidationError(attribute.name, f"must be positive, got {value}")
