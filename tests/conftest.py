"""
Shared fixtures: a controllable clock and scripted idle/meeting providers.
"""

import os
import tempfile

# Keep log files out of the home directory; read when breaktimer.logger is imported.
os.environ.setdefault("BREAKTIMER_LOG_DIR", tempfile.mkdtemp(prefix="breaktimer-logs-"))

from datetime import timedelta  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from breaktimer.idle_monitor import IdleTimeError  # noqa: E402
from breaktimer.scheduler import Scheduler  # noqa: E402
from breaktimer.settings import Config  # noqa: E402

T0 = 1_000_000.0


class FakeClock:
    def __init__(self, start: float = T0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta.total_seconds()

    def set(self, delta_from_start: timedelta) -> None:
        self.now = T0 + delta_from_start.total_seconds()


class FakeIdle:
    def __init__(self) -> None:
        self.value = timedelta(0)
        self.error = None

    def __call__(self) -> timedelta:
        if self.error is not None:
            raise self.error
        return self.value


class FakeMeeting:
    def __init__(self) -> None:
        self.active = False
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.active


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def idle():
    return FakeIdle()


@pytest.fixture
def meeting():
    return FakeMeeting()


@pytest.fixture
def speaker():
    return Mock()


@pytest.fixture
def make_scheduler(clock, idle, meeting, speaker):
    def factory(config: Config | None = None) -> Scheduler:
        return Scheduler(
            config or Config(),
            idle_provider=idle,
            meeting_provider=meeting,
            clock=clock,
            speaker=speaker,
        )

    return factory


@pytest.fixture
def idle_failure():
    return IdleTimeError("xprintidle is not installed")
