"""
Config file schema validation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from .breaks import Break
from .durations import DurationParseError, parse_duration
from . import logger as app_logger

_LOGGER = app_logger.get_logger()

DURATION_FIELDS: Tuple[str, ...] = (
    "max_idle_time_while_working",
    "workday",
    "day_resets_after",
    "just_started",
    "good_chunk_of_work",
    "minimum_time_between_breaks",
    "when_to_emphasize_break",
    "when_to_lock_screen",
)
KNOWN_FIELDS = frozenset(DURATION_FIELDS) | {"breaks", "tick_interval_seconds"}


class ConfigValidationError(ValueError):
    """Raised when config data is missing required values or is malformed."""


@dataclass(frozen=True)
class ConfigConstraints:
    max_prompt_length: int = 200
    min_tick_interval_seconds: int = 1
    max_tick_interval_seconds: int = 300


def loads_config(contents: str) -> Dict[str, Any]:
    """Decode JSON text and validate it; see ``validate_config``."""
    try:
        raw_config = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(f"not valid JSON: {exc}") from exc
    return validate_config(raw_config)


def validate_config(raw_config: Any) -> Dict[str, Any]:
    """
    Validate a decoded config object.

    Returns a normalized dict containing only the keys present in the input,
    with durations as ``timedelta`` and ``breaks`` as a list of Break.
    Missing keys are left for the caller to default.
    """
    if not isinstance(raw_config, dict):
        raise ConfigValidationError("config root must be a JSON object.")

    constraints = ConfigConstraints()
    normalized: Dict[str, Any] = {}

    for name in DURATION_FIELDS:
        if name in raw_config:
            normalized[name] = _require_duration(raw_config[name], field=name)

    if "tick_interval_seconds" in raw_config:
        normalized["tick_interval"] = timedelta(
            seconds=_require_interval(raw_config["tick_interval_seconds"], constraints)
        )

    if "breaks" in raw_config:
        normalized["breaks"] = _validate_breaks(raw_config["breaks"], constraints)

    unknown = sorted(set(raw_config) - KNOWN_FIELDS)
    if unknown:
        _LOGGER.warning("Ignoring unknown config keys: {}", ", ".join(unknown))

    return normalized


def _require_duration(value: Any, *, field: str) -> timedelta:
    if not isinstance(value, str):
        raise ConfigValidationError(
            f"{field} must be a duration string such as '10 minutes' or '1:30'."
        )
    try:
        return parse_duration(value)
    except DurationParseError as exc:
        raise ConfigValidationError(f"{field}: {exc}") from exc


def _require_string(
    value: Any,
    *,
    field: str,
    max_length: Optional[int] = None,
) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(f"{field} must be a string.")

    stripped = value.strip()
    if stripped == "":
        raise ConfigValidationError(f"{field} must be a non-empty string.")

    if max_length is not None and len(stripped) > max_length:
        raise ConfigValidationError(f"{field} must be at most {max_length} characters.")

    return stripped


def _require_interval(value: Any, constraints: ConfigConstraints) -> int:
    # bool is an int subclass; JSON floats and strings are not accepted either.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError("tick_interval_seconds must be a positive integer.")
    interval = value
    if not (
        constraints.min_tick_interval_seconds
        <= interval
        <= constraints.max_tick_interval_seconds
    ):
        raise ConfigValidationError(
            "tick_interval_seconds must be between "
            f"{constraints.min_tick_interval_seconds} and {constraints.max_tick_interval_seconds}."
        )
    return interval


def _validate_breaks(value: Any, constraints: ConfigConstraints) -> List[Break]:
    if not isinstance(value, list):
        raise ConfigValidationError("breaks must be a list.")

    breaks: List[Break] = []
    for index, entry in enumerate(value):
        field = f"breaks[{index}]"
        if not isinstance(entry, dict):
            raise ConfigValidationError(f"{field} must be an object with 'prompt' and 'after'.")
        prompt = _require_string(
            entry.get("prompt"),
            field=f"{field}.prompt",
            max_length=constraints.max_prompt_length,
        )
        if "after" not in entry:
            raise ConfigValidationError(f"{field}.after is required.")
        after = _require_duration(entry["after"], field=f"{field}.after")
        breaks.append(Break(prompt=prompt, after=after))
    return breaks
