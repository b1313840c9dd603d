"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import PreconditionViolation
from .domain.models import MonthDay, VenueSettings


class SeasonConfig(BaseModel):
    """Operating season as year-agnostic MM-DD bounds."""
    start: str = "06-01"
    end: str = "09-30"

    @field_validator("start", "end")
    @classmethod
    def validate_month_day(cls, value: str) -> str:
        """Ensure the bound is a real MM-DD pair."""
        try:
            return str(MonthDay.parse(value))
        except PreconditionViolation as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def validate_not_empty(self) -> "SeasonConfig":
        if self.start == self.end:
            raise ValueError("season start and end must differ")
        return self


class CapacityConfig(BaseModel):
    """Guest caps. Reception is hard; camping and RV are included allowances."""
    max_reception_guests: int = Field(default=150, ge=0)
    included_camping_guests: int = Field(default=60, ge=0)
    included_rv_sites: int = Field(default=15, ge=0)


class SchedulingConfig(BaseModel):
    """Turnover and last-minute thresholds, in days."""
    min_reset_gap_days: int = 1
    last_minute_threshold_days: int = 14

    @field_validator("min_reset_gap_days")
    @classmethod
    def validate_reset_gap(cls, value: int) -> int:
        """The venue always needs at least one day to turn over."""
        if value < 1:
            raise ValueError(f"min_reset_gap_days must be at least 1, got {value}")
        return value

    @field_validator("last_minute_threshold_days")
    @classmethod
    def validate_threshold(cls, value: int) -> int:
        if value < 0:
            raise ValueError("last_minute_threshold_days cannot be negative")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    business_name: str = "Venue"
    timezone: str = "America/Toronto"
    season: SeasonConfig = Field(default_factory=SeasonConfig)
    capacity: CapacityConfig = Field(default_factory=CapacityConfig)
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    bookings_file: Path | None = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    def to_venue_settings(self) -> VenueSettings:
        """Build the domain settings consumed by the scheduling validator."""
        return VenueSettings(
            season_start=MonthDay.parse(self.season.start),
            season_end=MonthDay.parse(self.season.end),
            max_reception_guests=self.capacity.max_reception_guests,
            included_camping_guests=self.capacity.included_camping_guests,
            included_rv_sites=self.capacity.included_rv_sites,
            min_reset_gap_days=self.scheduling.min_reset_gap_days,
            last_minute_threshold_days=self.scheduling.last_minute_threshold_days,
            timezone=self.timezone,
        )

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``bookings_file`` is resolved against the config file's directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.bookings_file is not None and not config.bookings_file.is_absolute():
            config = config.model_copy(
                update={"bookings_file": config_path.parent / config.bookings_file}
            )
        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of venuebooking/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
