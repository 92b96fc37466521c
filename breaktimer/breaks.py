"""
Break reminder rules keyed to accumulated work time.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Dict

from .durations import ZERO, format_duration


@dataclass
class Break:
    """
    A re-arming reminder: fires once ``after`` more work has accumulated since
    the work-time value recorded in ``last_done``.
    """

    prompt: str
    after: timedelta
    last_done: timedelta = field(default=ZERO, compare=False)

    def check(self, worktime: timedelta) -> bool:
        return worktime > self.after + self.last_done

    def mark_done(self, worktime: timedelta) -> None:
        """Record that the reminder was delivered at ``worktime`` of total work."""
        self.last_done = worktime

    def reset(self) -> None:
        self.last_done = ZERO

    def fresh_copy(self) -> "Break":
        return replace(self, last_done=ZERO)

    def to_dict(self) -> Dict[str, Any]:
        # last_done is runtime state and is never persisted.
        return {"prompt": self.prompt, "after": format_duration(self.after)}
