"""Time and identity providers."""

from .clock import FixedClock, SystemClock
from .id_generator import UuidIdGenerator

__all__ = [
    "FixedClock",
    "SystemClock",
    "UuidIdGenerator",
]
