"""Settings loading tests."""

from decimal import Decimal
import sys

from loguru import logger
from pydantic import ValidationError
import pytest

from music_distribution.config import (
    MonetizationConfig,
    Settings,
    get_logger,
    log_startup_info,
    settings,
    setup_loguru_logger,
)


class TestSettings:
    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.monetization.threshold_seconds == 30
        assert config.monetization.rate_per_stream == Decimal("0.003")
        assert config.search.sort_by_distance is True
        assert config.logging.log_file is None

    def test_nested_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONETIZATION__THRESHOLD_SECONDS", "45")
        monkeypatch.setenv("MONETIZATION__RATE_PER_STREAM", "0.004")
        monkeypatch.setenv("SEARCH__SORT_BY_DISTANCE", "false")

        config = Settings(_env_file=None)

        assert config.monetization.threshold_seconds == 45
        assert config.monetization.rate_per_stream == Decimal("0.004")
        assert config.search.sort_by_distance is False

    @pytest.mark.parametrize(
        "overrides", [{"threshold_seconds": 0}, {"rate_per_stream": Decimal("0")}]
    )
    def test_monetization_values_must_be_positive(self, overrides):
        with pytest.raises(ValidationError):
            MonetizationConfig(**overrides)


class TestLogging:
    @pytest.fixture
    def restore_default_sink(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_file_sink_is_added_when_configured(
        self, monkeypatch, tmp_path, restore_default_sink
    ):
        log_file = tmp_path / "logs" / "distribution.log"
        monkeypatch.setattr(settings.logging, "log_file", log_file)
        monkeypatch.setattr(settings.logging, "serialize", False)

        setup_loguru_logger(verbose=True)
        get_logger(__name__).info("Release distributed")
        logger.complete()

        assert log_file.exists()
        assert "Release distributed" in log_file.read_text()

    def test_startup_info_dumps_each_section(self, log_records):
        log_startup_info()

        assert "DEBUG|  MONETIZATION:" in log_records
        assert "DEBUG|    THRESHOLD_SECONDS: 30" in log_records
