"""Settings and logging for the music distribution service.

Usage:
    from music_distribution.config import get_logger, settings

    logger = get_logger(__name__)
    rate = settings.monetization.rate_per_stream
"""

from .logging import get_logger, log_startup_info, setup_loguru_logger
from .settings import (
    LoggingConfig,
    MonetizationConfig,
    SearchConfig,
    Settings,
    settings,
)

__all__ = [
    "LoggingConfig",
    "MonetizationConfig",
    "SearchConfig",
    "Settings",
    "get_logger",
    "log_startup_info",
    "settings",
    "setup_loguru_logger",
]
