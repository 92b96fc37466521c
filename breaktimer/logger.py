"""
loguru sinks for breaktimer.

State transitions and prompts go to stderr; tick-level detail such as
postponed breaks only reaches the rotating file under ``LOG_DIR``.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

LOG_DIR = Path(
    os.environ.get(
        "BREAKTIMER_LOG_DIR",
        str(Path.home() / ".local" / "state" / "breaktimer"),
    )
)
DEFAULT_LOG_PATH = LOG_DIR / "breaktimer.log"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> {message}"

_configured = False


def configure(log_path: Optional[Path] = None, *, console_level: str = "INFO") -> None:
    """Install the stderr and file sinks once per process."""
    global _configured
    if _configured:
        return
    target = log_path or DEFAULT_LOG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    # Windowed launches on Windows have no stderr.
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT)
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        diagnose=False,
    )
    _configured = True


def get_logger():
    configure()
    return _logger
