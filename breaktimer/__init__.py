"""
Screen-time tracking and break reminders.
"""

from .breaks import Break  # noqa: F401
from .durations import DurationParseError, format_duration, parse_duration  # noqa: F401
from .scheduler import IdleSince, Scheduler, WorkingSince  # noqa: F401
from .settings import Config, ConfigError, SettingsManager  # noqa: F401
