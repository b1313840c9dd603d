"""
Tests for YAML configuration loading.
"""

import pytest
from pydantic import ValidationError

from venuebooking.config import AppConfig, SchedulingConfig, SeasonConfig
from venuebooking.domain.models import MonthDay


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults_build_venue_settings(self):
        settings = AppConfig().to_venue_settings()

        assert settings.season_start == MonthDay(6, 1)
        assert settings.season_end == MonthDay(9, 30)
        assert settings.max_reception_guests == 150
        assert settings.min_reset_gap_days == 1
        assert settings.last_minute_threshold_days == 14

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "business_name: Willow Creek\n"
            "season:\n"
            "  start: '5-15'\n"
            "  end: '10-15'\n"
            "scheduling:\n"
            "  min_reset_gap_days: 2\n"
            "bookings_file: bookings.json\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)
        settings = config.to_venue_settings()

        assert config.business_name == "Willow Creek"
        assert config.season.start == "05-15"
        assert settings.season_end == MonthDay(10, 15)
        assert settings.min_reset_gap_days == 2
        assert config.bookings_file == tmp_path / "bookings.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("season: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError):
            AppConfig(timezone="Mars/Olympus_Mons")


class TestSectionValidation:
    """Tests for section-level validators."""

    def test_reset_gap_must_be_positive(self):
        with pytest.raises(ValidationError, match="at least 1"):
            SchedulingConfig(min_reset_gap_days=0)

    def test_season_bounds_must_be_real_dates(self):
        with pytest.raises(ValidationError):
            SeasonConfig(start="02-30")

    def test_season_bounds_must_differ(self):
        with pytest.raises(ValidationError):
            SeasonConfig(start="06-01", end="06-01")
