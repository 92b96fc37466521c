"""
Application coordinator driving the scheduler from a Qt timer.
"""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from .idle_monitor import IdleTimeError
from .prompt_window import PromptWindow
from .scheduler import Scheduler
from . import logger as app_logger

APP_NAME = "Break Timer"
APP_VERSION = "0.1.0"


class AppCoordinator(QObject):
    """
    Owns the scheduler on the Qt thread: the tick timer and the "Done" button
    both run on the event loop, so they never interleave.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._scheduler = scheduler
        self._manual_shutdown_requested = False

        self._window = PromptWindow()
        self._window.done.connect(self._on_done)
        self._window.closed.connect(self._on_window_closed)

        self._tray = QSystemTrayIcon(self)
        tray_icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
        self._tray.setIcon(tray_icon)
        self._tray.setToolTip(f"{APP_NAME} v{APP_VERSION}")

        menu = QMenu()
        show_action = QAction("Show Status", menu)
        exit_action = QAction("Exit", menu)
        menu.addAction(show_action)
        menu.addSeparator()
        menu.addAction(exit_action)
        self._tray.setContextMenu(menu)
        self._menu = menu

        show_action.triggered.connect(self._show_status)
        exit_action.triggered.connect(self.shutdown)

        interval_ms = max(1, int(scheduler.config.tick_interval.total_seconds())) * 1000
        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(interval_ms)
        self._tick_timer.timeout.connect(self._on_tick)

    def start(self) -> None:
        self._logger.info(
            "Starting break timer; ticking every {} seconds.",
            self._tick_timer.interval() // 1000,
        )
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray.show()
        self._render()
        self._window.present()
        self._tick_timer.start()

    def shutdown(self) -> None:
        self._logger.info("Shutting down on user request.")
        self._manual_shutdown_requested = True
        self._tick_timer.stop()
        self._window.hide()
        self._tray.hide()
        QApplication.instance().quit()

    @property
    def manual_shutdown_requested(self) -> bool:
        return self._manual_shutdown_requested

    def _on_tick(self) -> None:
        scheduler = self._scheduler
        try:
            scheduler.tick()
        except IdleTimeError as exc:
            self._logger.error("Skipping tick; idle time unavailable: {}", exc)
            return

        if scheduler.am_prompting is not None:
            self._window.present()
            if scheduler.check_escalation():
                self._window.emphasize()
            if scheduler.am_emphasizing:
                scheduler.announce()
        self._render()

    def _on_done(self) -> None:
        if self._scheduler.acknowledge():
            self._window.relax()
        self._render()

    def _on_window_closed(self) -> None:
        prompt = self._scheduler.am_prompting
        if prompt is None:
            self._logger.info("Status window closed; still tracking from the tray.")
            return
        # The next tick presents the window again while the prompt is pending.
        self._logger.info("Status window closed with a pending prompt: {}", prompt)
        if self._tray.isVisible():
            self._tray.showMessage(APP_NAME, prompt)

    def _show_status(self) -> None:
        self._render()
        self._window.present()
        self._window.raise_()

    def _render(self) -> None:
        scheduler = self._scheduler
        self._window.render(
            scheduler.am_prompting,
            scheduler.status_report,
            scheduler.latest_update,
        )
