"""Configuration management using Pydantic Settings.

Settings are loaded from environment variables (and a local ``.env`` file) and
grouped by concern:
- LoggingConfig: console/file log levels and the optional log file sink
- MonetizationConfig: stream monetization threshold and per-stream payout rate
- SearchConfig: song title search behaviour

Nested values are set with a double underscore, e.g.
``MONETIZATION__RATE_PER_STREAM=0.004`` or ``LOGGING__CONSOLE_LEVEL=DEBUG``.
"""

from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path | None = None  # No file sink unless configured
    serialize: bool = True


class MonetizationConfig(BaseModel):
    """Stream monetization and payout configuration."""

    # Streams at or above this many seconds count toward artist revenue
    threshold_seconds: PositiveInt = 30
    rate_per_stream: Decimal = Field(default=Decimal("0.003"), gt=0)


class SearchConfig(BaseModel):
    """Song title search configuration."""

    sort_by_distance: bool = True


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    monetization: MonetizationConfig = MonetizationConfig()
    search: SearchConfig = SearchConfig()


# Singleton instance for application use
settings = Settings()
