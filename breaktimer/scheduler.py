"""
Work/idle state machine and break-scheduling policy.

A single Scheduler instance is owned by whichever driver calls ``tick`` on a
fixed period (the Qt timer or the console loop). ``tick`` and ``acknowledge``
are the only mutators, and both must be called from the same thread.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, List, Optional, Union

from .breaks import Break
from .durations import ZERO, clamped_difference, format_duration
from .idle_monitor import idle_time
from .meeting import in_meeting
from .settings import Config
from .speech import Speaker
from . import logger as app_logger

_LOGGER = app_logger.get_logger()

Clock = Callable[[], float]
IdleProvider = Callable[[], timedelta]
MeetingProvider = Callable[[], bool]


@dataclass(frozen=True)
class WorkingSince:
    since: float


@dataclass(frozen=True)
class IdleSince:
    since: float


Status = Union[WorkingSince, IdleSince]


class Scheduler:
    """
    Consumes one idle-time sample per tick, tracks whether the user is working
    or away, accumulates screen time and decides when to prompt.

    ``screen_time`` covers completed work segments only; the open segment is
    added on the fly while working.
    """

    def __init__(
        self,
        config: Config,
        *,
        idle_provider: IdleProvider = idle_time,
        meeting_provider: MeetingProvider = in_meeting,
        clock: Clock = time.monotonic,
        speaker: Optional[Speaker] = None,
    ) -> None:
        self.config = config
        self._idle_provider = idle_provider
        self._meeting_provider = meeting_provider
        self._clock = clock
        self._speaker = speaker

        now = clock()
        self.status: Status = WorkingSince(now)
        self.screen_time: timedelta = ZERO
        self.breaks: List[Break] = [b.fresh_copy() for b in config.breaks]
        self.am_prompting: Optional[str] = None
        self.am_emphasizing = False
        self.last_prompt: float = now
        self.status_report = ""
        self.latest_update = ""

    @property
    def is_working(self) -> bool:
        return isinstance(self.status, WorkingSince)

    def total_work(self, now: Optional[float] = None) -> timedelta:
        """Screen time including the currently open work segment."""
        if isinstance(self.status, WorkingSince):
            current = self._clock() if now is None else now
            return self.screen_time + clamped_difference(current, self.status.since)
        return self.screen_time

    def tick(self) -> Optional[str]:
        """
        Advance the state machine by one sample.

        Returns the prompt issued during this tick, if any. Errors from the
        idle provider propagate before any state is touched.
        """
        idle = self._idle_provider()
        now = self._clock()
        if isinstance(self.status, WorkingSince):
            return self._tick_working(self.status.since, idle, now)
        self._tick_idle(self.status.since, idle, now)
        return None

    def acknowledge(self) -> bool:
        """
        The user dismissed the active prompt. Returns True when a prompt was
        pending so the caller can restore any UI hidden while emphasizing.
        """
        self.am_emphasizing = False
        prompt, self.am_prompting = self.am_prompting, None
        if prompt is None:
            return False
        self.status_report = f"Well done with the {prompt}!"
        _LOGGER.info("Prompt acknowledged: {}", prompt)
        return True

    def check_escalation(self) -> bool:
        """
        Escalate a prompt left unacknowledged for ``when_to_emphasize_break``.
        Restarts the emphasis window each time it fires.
        """
        if self.am_prompting is None:
            return False
        now = self._clock()
        if clamped_difference(now, self.last_prompt) <= self.config.when_to_emphasize_break:
            return False
        self.am_emphasizing = True
        self.last_prompt = now
        _LOGGER.info("Emphasizing unacknowledged prompt: {}", self.am_prompting)
        return True

    def announce(self) -> None:
        if self.am_prompting is not None:
            self._say(self.am_prompting)

    def _tick_working(self, start: float, idle: timedelta, now: float) -> Optional[str]:
        config = self.config
        if idle > config.max_idle_time_while_working and not self._meeting_provider():
            idle_start = now - idle.total_seconds()
            self.screen_time += clamped_difference(idle_start, start)
            self.status = IdleSince(idle_start)
            self.status_report = (
                f"After working {format_duration(self.screen_time)} you are now AFK!"
            )
            _LOGGER.info(self.status_report)
            return None

        this_work = clamped_difference(now, start)
        total_work = this_work + self.screen_time
        issued: Optional[str] = None

        if (
            total_work > config.workday
            and clamped_difference(now, self.last_prompt) > config.just_started
        ):
            issued = f"End of day after {format_duration(total_work)}"
            self._prompt(issued)
            self.last_prompt = now
        elif (
            (this_work < config.just_started or this_work > config.good_chunk_of_work)
            and self.am_prompting is None
            and not self._meeting_provider()
        ):
            issued = self._evaluate_breaks(total_work, now)
            if issued is not None:
                self._prompt(issued)

        self.latest_update = f"You've been working for {format_duration(total_work)}"
        return issued

    def _evaluate_breaks(self, total_work: timedelta, now: float) -> Optional[str]:
        candidate: Optional[str] = None
        for rule in self.breaks:
            if not rule.check(total_work):
                continue
            prompt_gap = clamped_difference(now, self.last_prompt)
            if candidate is not None:
                self._postpone(f"Postponing {rule.prompt}, see above.")
            elif self._meeting_provider():
                self._postpone(f"Postponing {rule.prompt} while you meet.")
            elif prompt_gap < self.config.minimum_time_between_breaks:
                remaining = self.config.minimum_time_between_breaks - prompt_gap
                self._postpone(f"Postponing {rule.prompt} for {format_duration(remaining)}.")
            else:
                candidate = rule.prompt
                rule.mark_done(total_work)
                self.last_prompt = now
        return candidate

    def _tick_idle(self, start: float, idle: timedelta, now: float) -> None:
        config = self.config
        idle_start = now - idle.total_seconds()
        away = clamped_difference(idle_start, start)
        if away > config.max_idle_time_while_working:
            self.status = WorkingSince(idle_start)
            self.status_report = f"You resumed working after a {format_duration(away)} break."
            _LOGGER.info(self.status_report)
        elif idle > config.day_resets_after and self.screen_time > ZERO:
            self.status_report = "I think it is a new day.  Resetting."
            self.screen_time = ZERO
            for rule in self.breaks:
                rule.reset()
            _LOGGER.info("Idle for {}; starting a new day.", format_duration(idle))
        else:
            self.latest_update = f"You've been idle for {format_duration(idle)}"

    def _postpone(self, message: str) -> None:
        self.status_report = message
        _LOGGER.debug(message)

    def _prompt(self, message: str) -> None:
        _LOGGER.info("Prompting: {}", message)
        self._say(message)
        self.am_prompting = message

    def _say(self, message: str) -> None:
        if self._speaker is not None:
            self._speaker.say(message)
