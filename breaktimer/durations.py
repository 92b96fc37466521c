"""
Compact human-readable duration strings used in the config file and status text.

``format_duration`` truncates to whole minutes, so ``parse_duration`` does not
restore sub-minute precision; re-formatting the parsed value is stable.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Tuple

_HOUR_SUFFIXES: Tuple[str, ...] = ("h", "hours", "hour")
_MINUTE_SUFFIXES: Tuple[str, ...] = ("m", "minutes", "minute")

ZERO = timedelta(0)


class DurationParseError(ValueError):
    """Raised when a string is not one of the supported duration shapes."""


def format_duration(value: timedelta) -> str:
    """Render ``value`` as ``"3 hours"``, ``"5 minutes"`` or ``"3:02"``."""
    total_minutes = max(0, int(value.total_seconds())) // 60
    hours = total_minutes // 60
    minutes = total_minutes - hours * 60

    if hours == 0 and minutes == 0:
        return "0 minutes"
    if minutes == 0:
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    if hours == 0:
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{hours}:{minutes:02}"


def parse_duration(text: str) -> timedelta:
    """
    Parse ``"H:MM"``, ``"<n>h"``/``"<n> hours"`` or ``"<n>m"``/``"<n> minutes"``.

    Both numbers in the colon form may be fractional. Raises
    DurationParseError for any other shape, a non-numeric component or a
    negative result.
    """
    if not isinstance(text, str):
        raise DurationParseError(f"expected a duration string, got {type(text).__name__}")

    hours = 0.0
    minutes = 0.0
    if ":" in text:
        raw_hours, raw_minutes = text.split(":", 1)
        hours = _parse_number(raw_hours, text)
        minutes = _parse_number(raw_minutes, text)
    else:
        raw_hours = _strip_any_suffix(text, _HOUR_SUFFIXES)
        if raw_hours is not None:
            hours = _parse_number(raw_hours, text)
        else:
            raw_minutes = _strip_any_suffix(text, _MINUTE_SUFFIXES)
            if raw_minutes is None:
                raise DurationParseError(
                    f"{text!r} is not a duration (expected e.g. '1:30', '2 hours' or '5 minutes')"
                )
            minutes = _parse_number(raw_minutes, text)

    total = (hours * 60.0 + minutes) * 60.0
    if total < 0:
        raise DurationParseError(f"{text!r} is negative")
    try:
        return timedelta(seconds=round(total))
    except OverflowError as exc:
        raise DurationParseError(f"{text!r} is too large") from exc


def clamped_difference(later: float, earlier: float) -> timedelta:
    """Return ``later - earlier`` in seconds as a timedelta, never below zero."""
    return timedelta(seconds=max(0.0, later - earlier))


def _strip_any_suffix(text: str, suffixes: Tuple[str, ...]) -> Optional[str]:
    for suffix in suffixes:
        if text.endswith(suffix):
            return text[: -len(suffix)]
    return None


def _parse_number(raw: str, original: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError as exc:
        raise DurationParseError(f"{original!r} has a non-numeric component {raw.strip()!r}") from exc
    if value != value or value in (float("inf"), float("-inf")):
        raise DurationParseError(f"{original!r} is not a finite duration")
    return value
