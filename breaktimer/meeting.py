"""
Video-call detection.

A browser call holds a display-sleep power assertion, which ``pmset -g``
lists under the owning process name. Detection is best effort and never
raises.
"""

from __future__ import annotations

import subprocess

from . import logger as app_logger

_LOGGER = app_logger.get_logger()

MEETING_MARKER = "Google Chrome"
_QUERY_TIMEOUT_SECONDS = 5


def in_meeting() -> bool:
    try:
        completed = subprocess.run(
            ["pmset", "-g"],
            capture_output=True,
            text=True,
            timeout=_QUERY_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        _LOGGER.debug("Meeting detection unavailable: {}", exc)
        return False
    return MEETING_MARKER in (completed.stdout or "")
