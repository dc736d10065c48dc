"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .adapters.booking_api_client import DEFAULT_BASE_URL
from .domain.availability_engine import DEFAULT_STEP_MINUTES
from .domain.exceptions import ConfigError
from .domain.models import OverlapPolicy
from .services.availability_service import UpstreamErrorPolicy


class ApiConfig(BaseModel):
    """Where the booking API lives."""
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the request timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value


class DefaultsConfig(BaseModel):
    """Default settings for a slot search."""
    duration_minutes: int = 60
    quantity: int = 2

    @field_validator("duration_minutes", "quantity")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure defaults are positive."""
        if value <= 0:
            raise ValueError("defaults must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    duration_options: List[int] = Field(default_factory=lambda: [30, 60, 120])
    step_minutes: int = DEFAULT_STEP_MINUTES
    overlap_policy: OverlapPolicy = OverlapPolicy.POINT
    on_upstream_error: UpstreamErrorPolicy = UpstreamErrorPolicy.ABORT
    mock_data_path: Optional[Path] = None

    @field_validator("duration_options")
    @classmethod
    def validate_duration_options(cls, value: List[int]) -> List[int]:
        """Ensure durations are positive and deduplicated."""
        if not value:
            raise ValueError("duration_options must not be empty")
        invalid = [duration for duration in value if duration <= 0]
        if invalid:
            raise ValueError(f"duration_options must be positive, got {invalid}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for duration in value:
            if duration not in seen:
                deduped.append(duration)
                seen.add(duration)
        return deduped

    @field_validator("step_minutes")
    @classmethod
    def validate_step(cls, value: int) -> int:
        """Ensure the enumeration step is positive."""
        if value <= 0:
            raise ValueError("step_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_default_duration(self) -> "AppConfig":
        """The default duration has to be one of the offered options."""
        if self.defaults.duration_minutes not in self.duration_options:
            raise ValueError(
                f"defaults.duration_minutes ({self.defaults.duration_minutes}) "
                f"must be one of duration_options {self.duration_options}"
            )
        return self

    def validate_duration(self, duration: int) -> int:
        """
        Check a requested duration against the offered options.

        Raises:
            ValueError: If the duration is not offered
        """
        if duration not in self.duration_options:
            options = ", ".join(str(d) for d in self.duration_options)
            raise ValueError(f"Duration {duration} is not offered. Choose one of: {options}")
        return duration

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load an explicit config file, or the default one if it exists.

        Without an explicit path and without a default file, built-in
        defaults are used.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.cwd() / "config.yaml"
