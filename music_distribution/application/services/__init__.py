"""Application services - use case orchestrators."""

from .distribution_service import (
    MusicDistributionService,
    NoTransactionManager,
    default_monetization_policy,
    default_payment_calculator,
)

__all__ = [
    "MusicDistributionService",
    "NoTransactionManager",
    "default_monetization_policy",
    "default_payment_calculator",
]
