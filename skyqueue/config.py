"""
SKYQUEUE Configuration System

Configuration for the simulator using pydantic for validation and YAML for
human-readable config files.

Configuration loading priority:
1. Environment variables (SKYQUEUE_*)
2. Config file passed to load_config() / --config
3. ./skyqueue.yaml (current directory)
4. ~/.skyqueue/config.yaml (user home)
5. Built-in defaults

Usage:
    from skyqueue.config import load_config

    config = load_config()
    print(config.timing.slew_duration_sec)
    print(config.leaderboard.base_url)
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from skyqueue import constants
from skyqueue.exceptions import ConfigurationError

__all__ = [
    "SkyQueueConfig",
    "TimingConfig",
    "QueueConfig",
    "WeatherConfig",
    "SimulationConfig",
    "LeaderboardConfig",
    "load_config",
    "get_config_paths",
]


# =============================================================================
# Configuration Sections
# =============================================================================


class TimingConfig(BaseModel):
    """Real-time pacing of the observation state machine."""

    slew_duration_sec: float = Field(
        default=constants.SLEW_DURATION_SEC,
        ge=0.0,
        le=60.0,
        description="Real seconds spent slewing to each target",
    )
    observation_duration_scale: float = Field(
        default=constants.OBSERVATION_DURATION_SCALE,
        gt=0.0,
        le=1.0,
        description="Real seconds per simulated second of exposure",
    )
    inter_target_pause_sec: float = Field(
        default=constants.INTER_TARGET_PAUSE_SEC,
        ge=0.0,
        le=60.0,
        description="Real seconds between a completed target and the next slew",
    )
    tick_interval_sec: float = Field(
        default=constants.DEFAULT_TICK_INTERVAL_SEC,
        gt=0.0,
        le=5.0,
        description="Tick length used by the headless runner",
    )


class QueueConfig(BaseModel):
    """Nightly queue limits."""

    max_size: int = Field(
        default=constants.MAX_QUEUE_SIZE,
        ge=1,
        le=50,
        description="Maximum observations in one night's queue",
    )


class WeatherConfig(BaseModel):
    """Stochastic weather generation."""

    smoothing: float = Field(
        default=constants.WEATHER_SMOOTHING,
        gt=0.0,
        le=1.0,
        description="Exponential smoothing factor applied each tick",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducible forecasts (None = system entropy)",
    )


class SimulationConfig(BaseModel):
    """Simulated calendar and catalog source."""

    start_date: date = Field(
        default=date(2024, 1, 15),
        description="Calendar date of the first night of the week",
    )
    night_start_hour: int = Field(
        default=constants.NIGHT_START_HOUR,
        ge=0,
        le=23,
        description="Local hour at which each night begins",
    )
    catalog_file: Optional[str] = Field(
        default=None,
        description="YAML catalog to load instead of the built-in training catalog",
    )

    @field_validator("catalog_file")
    @classmethod
    def validate_catalog_file(cls, v: Optional[str]) -> Optional[str]:
        """Require a YAML file extension for custom catalogs."""
        if v is not None and not v.endswith((".yaml", ".yml")):
            raise ValueError(f"Catalog file must be YAML (.yaml/.yml): {v}")
        return v


class LeaderboardConfig(BaseModel):
    """Remote leaderboard service."""

    enabled: bool = Field(
        default=False,
        description="Submit week-end scores to the leaderboard",
    )
    player_name: Optional[str] = Field(
        default=None,
        description="Name submitted under when enabled and no --submit is given",
    )
    base_url: str = Field(
        default=constants.LEADERBOARD_DEFAULT_URL,
        description="Leaderboard service base URL",
    )
    scores_path: str = Field(
        default="/scores",
        description="Path of the scores resource (GET list, POST submit)",
    )
    stream_path: str = Field(
        default="/scores/stream",
        description="Path of the server-sent events stream of the top list",
    )
    timeout: float = Field(
        default=constants.LEADERBOARD_TIMEOUT_SEC,
        ge=0.5,
        le=120.0,
        description="HTTP request timeout in seconds",
    )
    max_entries: int = Field(
        default=constants.LEADERBOARD_MAX_ENTRIES,
        ge=1,
        le=100,
        description="Maximum leaderboard records kept from a response",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Leaderboard URL must start with http:// or https://: {v}")
        return v.rstrip("/")


# =============================================================================
# Master Configuration
# =============================================================================


class SkyQueueConfig(BaseModel):
    """Top-level configuration aggregating every section."""

    model_config = ConfigDict(extra="ignore")

    timing: TimingConfig = Field(default_factory=TimingConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    leaderboard: LeaderboardConfig = Field(default_factory=LeaderboardConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Global logging level",
    )


# =============================================================================
# Configuration Loading
# =============================================================================


def get_config_paths() -> list[Path]:
    """Config file locations in priority order (first found wins)."""
    home = Path.home()
    return [
        Path("./skyqueue.yaml"),
        Path("./skyqueue.yml"),
        home / ".skyqueue" / "config.yaml",
        home / ".skyqueue" / "config.yml",
    ]


def _apply_env_overrides(config_dict: dict) -> dict:
    """Apply SKYQUEUE_SECTION_KEY environment overrides.

    Example: SKYQUEUE_LEADERBOARD_BASE_URL=http://scores.local:8080
    sets leaderboard.base_url. SKYQUEUE_LOG_LEVEL is the one top-level key.
    """
    prefix = "SKYQUEUE_"

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        name = key[len(prefix):].lower()
        if name == "log_level":
            config_dict["log_level"] = value.upper()
            continue

        parts = name.split("_")
        if len(parts) < 2:
            continue
        section = parts[0]
        setting = "_".join(parts[1:])

        if value.lower() in ("true", "false"):
            value = value.lower() == "true"
        elif value.isdigit():
            value = int(value)
        else:
            try:
                value = float(value)
            except ValueError:
                pass

        section_dict = config_dict.get(section)
        if not isinstance(section_dict, dict):
            section_dict = {}
            config_dict[section] = section_dict
        section_dict[setting] = value

    return config_dict


def load_config(config_path: Optional[str | Path] = None) -> SkyQueueConfig:
    """Load configuration from file and environment with validation.

    Args:
        config_path: Explicit config file path, or None for auto-discovery

    Returns:
        Validated SkyQueueConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or fails validation
    """
    config_dict: dict = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}", config_file=str(path))
        config_files = [path]
    else:
        config_files = get_config_paths()

    for path in config_files:
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in {path}: {e}", config_file=str(path)
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read {path}: {e}", config_file=str(path)
                ) from e
            if not isinstance(config_dict, dict):
                raise ConfigurationError(
                    f"Config file must contain a mapping: {path}", config_file=str(path)
                )
            break

    config_dict = _apply_env_overrides(config_dict)

    try:
        return SkyQueueConfig(**config_dict)
    except Exception as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
