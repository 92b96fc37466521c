"""
Entry point for the breaktimer application.
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Iterable, Optional, Sequence, Tuple

from .console import run_console
from .scheduler import Scheduler
from .settings import Config, ConfigError, SettingsManager
from .speech import SilentSpeaker, Speaker
from . import logger as app_logger

_LOGGER = app_logger.get_logger()

EXIT_CONFIG_ERROR = 2


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="breaktimer",
        description="Track screen time and remind you to take breaks.",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="run without a window, printing status to the terminal",
    )
    parser.add_argument(
        "--config",
        help="path to the JSON config file (default: ~/.config/breaks.json)",
    )
    parser.add_argument("--no-speech", action="store_true", help="do not speak prompts aloud")
    return parser.parse_args(argv)


def _run_application_once(argv: Iterable[str], config: Config, speaker: Speaker) -> Tuple[int, bool]:
    """Start the Qt application once and report whether shutdown was intentional."""
    from PySide6.QtWidgets import QApplication

    from .app import AppCoordinator

    app = QApplication(list(argv))
    app.setQuitOnLastWindowClosed(False)
    coordinator = AppCoordinator(Scheduler(config, speaker=speaker))
    coordinator.start()
    exit_code = app.exec()
    return exit_code, coordinator.manual_shutdown_requested


def _run_gui(config: Config, speaker: Speaker) -> int:
    backoff_seconds = 2
    max_backoff = 30

    while True:
        try:
            exit_code, manual = _run_application_once(sys.argv[:1], config, speaker)
        except Exception:  # pragma: no cover - crash guard around the Qt loop
            _LOGGER.exception("Break timer crashed; restarting.")
            exit_code = 1
            manual = False

        if manual:
            return exit_code

        _LOGGER.warning(
            "Break timer exited unexpectedly (code={}). Restarting in {} seconds.",
            exit_code,
            backoff_seconds,
        )
        time.sleep(backoff_seconds)
        backoff_seconds = min(backoff_seconds * 2, max_backoff)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    manager = SettingsManager(path=args.config) if args.config else SettingsManager()
    try:
        config = manager.load()
    except ConfigError as exc:
        _LOGGER.error("{}", exc)
        print(f"breaktimer: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    speaker: Speaker = SilentSpeaker() if args.no_speech else Speaker()
    if args.console:
        run_console(Scheduler(config, speaker=speaker))
        return 0
    return _run_gui(config, speaker)


if __name__ == "__main__":
    raise SystemExit(main())
