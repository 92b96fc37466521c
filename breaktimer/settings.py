"""
File-backed configuration for the breaktimer runtime.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .breaks import Break
from .config_schema import DURATION_FIELDS, ConfigValidationError, loads_config
from .durations import format_duration
from . import logger as app_logger

_LOGGER = app_logger.get_logger()

CONFIG_ENV_VAR = "BREAKTIMER_CONFIG"
CONFIG_FILENAME = "breaks.json"


def _minutes(value: int) -> timedelta:
    return timedelta(minutes=value)


def _hours(value: int) -> timedelta:
    return timedelta(hours=value)


def _default_breaks() -> Tuple[Break, ...]:
    return (
        Break("Time for a 7-minute exercise", _hours(3)),
        Break("Switch to standing desk", _hours(4) + _minutes(1)),
    )


@dataclass(frozen=True)
class Config:
    # Durations are thresholds on idle samples or on accumulated work time.
    max_idle_time_while_working: timedelta = _minutes(10)
    workday: timedelta = _hours(8)
    day_resets_after: timedelta = _hours(7)
    just_started: timedelta = _minutes(6)
    good_chunk_of_work: timedelta = _minutes(30)
    # Expected to stay below just_started.
    minimum_time_between_breaks: timedelta = _minutes(5)
    when_to_emphasize_break: timedelta = _minutes(2)
    when_to_lock_screen: timedelta = _minutes(10)
    breaks: Tuple[Break, ...] = field(default_factory=_default_breaks)
    tick_interval: timedelta = timedelta(seconds=10)

    @classmethod
    def from_normalized(cls, normalized: Dict[str, Any]) -> "Config":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in normalized.items() if k in known}
        if "breaks" in values:
            values["breaks"] = tuple(values["breaks"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            name: format_duration(getattr(self, name)) for name in DURATION_FIELDS
        }
        data["tick_interval_seconds"] = int(self.tick_interval.total_seconds())
        data["breaks"] = [b.to_dict() for b in self.breaks]
        return data


class ConfigError(Exception):
    """Config file exists but could not be read or parsed."""

    def __init__(self, path: Path, reason: str, *, unreadable: bool = False) -> None:
        self.path = path
        self.reason = reason
        self.unreadable = unreadable
        verb = "read" if unreadable else "parse"
        super().__init__(f"Unable to {verb} {path}: {reason}")


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / CONFIG_FILENAME


class SettingsManager:
    """Loads the config file, writing defaults when none exists yet."""

    def __init__(self, *, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_config_path()

    def load(self) -> Config:
        try:
            contents = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            _LOGGER.info("No config at {}; using defaults.", self.path)
            config = Config()
            self._persist_defaults(config)
            return config
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(self.path, str(exc), unreadable=True) from exc

        try:
            normalized = loads_config(contents)
        except ConfigValidationError as exc:
            raise ConfigError(self.path, str(exc)) from exc

        config = Config.from_normalized(normalized)
        if config.minimum_time_between_breaks >= config.just_started:
            _LOGGER.warning(
                "minimum_time_between_breaks ({}) should be less than just_started ({}).",
                format_duration(config.minimum_time_between_breaks),
                format_duration(config.just_started),
            )
        _LOGGER.info("Loaded config from {} with {} break(s).", self.path, len(config.breaks))
        return config

    def save(self, config: Config) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")

    def _persist_defaults(self, config: Config) -> None:
        try:
            self.save(config)
        except OSError as exc:
            _LOGGER.warning("Could not write default config to {}: {}", self.path, exc)
