"""Loguru setup for the music distribution service.

Modules obtain their logger with ``get_logger(__name__)``; every record then
carries ``service`` and ``module`` in its extra context. Host processes call
``setup_loguru_logger`` once at startup to install the console sink and, when
``LOGGING__LOG_FILE`` is set, a rotating file sink.
"""

from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

SERVICE_NAME = "music-distribution"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | "
    "{extra[module]} | {function}:{line} | {message}"
)


def setup_loguru_logger(verbose: bool = False) -> None:
    """Replace loguru's default handler with the configured sinks.

    Args:
        verbose: Log DEBUG to the console and include variable values in tracebacks
    """
    logger.remove()
    logger.configure(extra={"service": SERVICE_NAME, "module": "root"})

    logger.add(
        sink=sys.stderr,
        level="DEBUG" if verbose else settings.logging.console_level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    if settings.logging.log_file is None:
        return

    log_path = Path(settings.logging.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        sink=str(log_path),
        level=settings.logging.file_level,
        format=FILE_FORMAT,
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        catch=True,
        serialize=settings.logging.serialize,
    )


def get_logger(name: str) -> Any:  # loguru does not export its Logger type
    """Logger bound with this service's name and the calling module.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Release distributed", release_id=str(release_id))
        ```
    """
    return logger.bind(module=name, service=SERVICE_NAME)


def log_startup_info() -> None:
    """Log the active configuration, one section at a time."""
    startup_logger = get_logger(__name__)
    rule = "-" * 50

    startup_logger.info("{}", rule)
    startup_logger.info("Music Distribution Service")
    startup_logger.info("{}", rule)

    startup_logger.debug("Configuration:")
    for section_name, section_values in settings.model_dump().items():
        startup_logger.debug("  {}:", section_name.upper())
        for key, value in section_values.items():
            startup_logger.debug("    {}: {}", key.upper(), value)
