"""Application utilities - shared helpers for application services."""

from .boundaries import use_case_boundary
from .concurrency import fetch_concurrently

__all__ = [
    "fetch_concurrently",
    "use_case_boundary",
]
