"""Configuration loader for the Smart Transit app."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class ScheduleConfig:
    """Schedule feed locations and refresh cadence."""

    data_dir: str
    north_feed: str
    south_feed: str
    refresh_interval_seconds: int

    @property
    def north_path(self) -> Path:
        return Path(self.data_dir) / self.north_feed

    @property
    def south_path(self) -> Path:
        return Path(self.data_dir) / self.south_feed


@dataclass(frozen=True)
class LocationConfig:
    """Fixed device location used by the static location provider."""

    latitude: float | None
    longitude: float | None
    authorized: bool


@dataclass(frozen=True)
class DisplayConfig:
    """Departure board preview configuration."""

    width: int
    height: int
    max_departures: int
    window_minutes: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    schedule: ScheduleConfig
    location: LocationConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = _require_key(data, name, name)
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' config must be a mapping")
    return section


def _optional_float(value: Any, name: str) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{name}' must be a number, got {value!r}") from exc


def _optional_bool(value: Any, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"'{name}' must be true or false, got {value!r}")
    return value


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file.

    SMART_TRANSIT_DATA_DIR overrides the feed directory, and
    SMART_TRANSIT_LATITUDE / SMART_TRANSIT_LONGITUDE together override the
    configured location. Both may come from a .env file.
    """
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    schedule_section = _require_section(data, "schedule")
    location_section = _require_section(data, "location")
    display_section = _require_section(data, "display")
    logging_section = _require_section(data, "logging")

    data_dir = os.environ.get("SMART_TRANSIT_DATA_DIR") or _require_key(
        schedule_section, "data_dir", "schedule"
    )
    schedule = ScheduleConfig(
        data_dir=str(data_dir),
        north_feed=_require_key(schedule_section, "north_feed", "schedule"),
        south_feed=_require_key(schedule_section, "south_feed", "schedule"),
        refresh_interval_seconds=_require_key(schedule_section, "refresh_interval_seconds", "schedule"),
    )

    env_lat = os.environ.get("SMART_TRANSIT_LATITUDE")
    env_lon = os.environ.get("SMART_TRANSIT_LONGITUDE")
    if env_lat and env_lon:
        latitude, longitude = env_lat, env_lon
    else:
        latitude = location_section.get("latitude")
        longitude = location_section.get("longitude")
    location = LocationConfig(
        latitude=_optional_float(latitude, "latitude"),
        longitude=_optional_float(longitude, "longitude"),
        authorized=_optional_bool(location_section.get("authorized"), "authorized", default=True),
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        max_departures=display_section.get("max_departures", 10),
        window_minutes=display_section.get("window_minutes", 120),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(schedule=schedule, location=location, display=display, log=logging)
