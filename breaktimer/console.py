"""
Headless driver: a blocking polling loop that prints prompts and status lines.

There is no "Done" button here, so a prompt counts as acknowledged once it has
been printed.
"""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

from .idle_monitor import IdleTimeError
from .scheduler import Scheduler
from . import logger as app_logger

_LOGGER = app_logger.get_logger()


def run_console(
    scheduler: Scheduler,
    *,
    sleep: Callable[[float], None] = time.sleep,
    out: Optional[TextIO] = None,
    max_ticks: Optional[int] = None,
) -> int:
    """Tick until interrupted (or ``max_ticks`` ticks); returns ticks completed."""
    stream = out or sys.stdout
    interval = scheduler.config.tick_interval.total_seconds()
    last_report = scheduler.status_report
    ticks = 0
    try:
        while max_ticks is None or ticks < max_ticks:
            ticks += 1
            try:
                prompt = scheduler.tick()
            except IdleTimeError as exc:
                _LOGGER.error("Skipping tick; idle time unavailable: {}", exc)
            else:
                if scheduler.status_report != last_report:
                    last_report = scheduler.status_report
                    stream.write(f"\n{last_report}\n")
                if prompt is not None:
                    stream.write(f"\n*** {prompt} ***\n")
                    scheduler.acknowledge()
                    last_report = scheduler.status_report
                stream.write(f"\rupdate: {scheduler.latest_update}")
                stream.flush()
            if max_ticks is None or ticks < max_ticks:
                sleep(interval)
    except KeyboardInterrupt:
        stream.write("\n")
        _LOGGER.info("Console loop interrupted after {} tick(s).", ticks)
    return ticks
