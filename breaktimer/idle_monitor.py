"""
System idle time: seconds since the last keyboard or mouse input.

Windows uses Win32 GetLastInputInfo, macOS reads HIDIdleTime from ioreg and
X11 desktops use xprintidle.
"""

from __future__ import annotations

import ctypes
import re
import subprocess
import sys
from datetime import timedelta
from typing import Callable

_QUERY_TIMEOUT_SECONDS = 5
_HID_IDLE_RE = re.compile(r'"HIDIdleTime"\s*=\s*(\d+)')


class IdleTimeError(OSError):
    """The operating system could not report the idle time."""


def get_idle_seconds() -> float:
    """Return idle seconds for the current platform, raising IdleTimeError on failure."""
    if sys.platform == "win32":
        return _windows_idle_seconds()
    if sys.platform == "darwin":
        return _macos_idle_seconds()
    return _x11_idle_seconds()


def idle_time() -> timedelta:
    return timedelta(seconds=get_idle_seconds())


def as_idle_provider(seconds_provider: Callable[[], float]) -> Callable[[], timedelta]:
    """Adapt a seconds-returning callable to the scheduler's timedelta provider."""

    def provider() -> timedelta:
        return timedelta(seconds=max(0.0, seconds_provider()))

    return provider


def _windows_idle_seconds() -> float:
    try:
        last_input_info = _get_last_input_info()
        tick_count_ms = _get_tick_count_ms()
    except OSError as exc:
        raise IdleTimeError(f"GetLastInputInfo failed: {exc}") from exc
    # GetTickCount wraps at 2**32 ms; dwTime is 32-bit.
    idle_ms = (tick_count_ms - last_input_info) & 0xFFFFFFFF
    return idle_ms / 1000.0


def _get_last_input_info() -> int:
    class LASTINPUTINFO(ctypes.Structure):
        _fields_ = [("cbSize", ctypes.c_uint), ("dwTime", ctypes.c_uint)]

    user32 = ctypes.windll.user32  # type: ignore[attr-defined]
    last_input = LASTINPUTINFO()
    last_input.cbSize = ctypes.sizeof(LASTINPUTINFO)

    if not user32.GetLastInputInfo(ctypes.byref(last_input)):
        raise ctypes.WinError()  # type: ignore[attr-defined]

    return last_input.dwTime


def _get_tick_count_ms() -> int:
    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    if hasattr(kernel32, "GetTickCount64"):
        return int(kernel32.GetTickCount64())
    return int(kernel32.GetTickCount())


def _macos_idle_seconds() -> float:
    output = _run_query(["ioreg", "-c", "IOHIDSystem", "-d", "4"])
    match = _HID_IDLE_RE.search(output)
    if match is None:
        raise IdleTimeError("ioreg output did not contain HIDIdleTime")
    return int(match.group(1)) / 1_000_000_000


def _x11_idle_seconds() -> float:
    output = _run_query(["xprintidle"]).strip()
    try:
        return int(output) / 1000.0
    except ValueError as exc:
        raise IdleTimeError(f"xprintidle returned {output!r}") from exc


def _run_query(command: list[str]) -> str:
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=_QUERY_TIMEOUT_SECONDS,
            check=True,
        )
    except FileNotFoundError as exc:
        raise IdleTimeError(f"{command[0]} is not installed") from exc
    except subprocess.TimeoutExpired as exc:
        raise IdleTimeError(f"{command[0]} timed out") from exc
    except subprocess.CalledProcessError as exc:
        raise IdleTimeError(f"{command[0]} exited with status {exc.returncode}") from exc
    except OSError as exc:
        raise IdleTimeError(f"{command[0]} could not be started: {exc}") from exc
    return completed.stdout
