"""
Small status window showing the active prompt, the latest status report and
the running work/idle line, with a "Done" button to acknowledge prompts.
"""

from __future__ import annotations

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QApplication,
    QGraphicsDropShadowEffect,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class PromptWindow(QWidget):
    done = Signal()
    closed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Break Timer")
        self.setObjectName("PromptWindow")

        self._container = QWidget(self)
        self._container.setObjectName("PromptCard")
        shadow = QGraphicsDropShadowEffect(self._container)
        shadow.setBlurRadius(24)
        shadow.setColor(QColor(0, 0, 0, 140))
        shadow.setOffset(0, 10)
        self._container.setGraphicsEffect(shadow)

        self._prompt_label = QLabel()
        self._prompt_label.setObjectName("PromptText")
        self._prompt_label.setWordWrap(True)
        self._prompt_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._report_label = QLabel()
        self._report_label.setObjectName("StatusReport")
        self._report_label.setWordWrap(True)
        self._report_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._latest_label = QLabel()
        self._latest_label.setObjectName("LatestUpdate")
        self._latest_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._done_button = QPushButton("Done")
        self._done_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._done_button.clicked.connect(self.done)  # type: ignore[arg-type]

        base_layout = QVBoxLayout(self)
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.addWidget(self._container)

        layout = QVBoxLayout(self._container)
        layout.setContentsMargins(16, 14, 16, 16)
        layout.setSpacing(8)
        layout.addWidget(self._prompt_label)
        layout.addWidget(self._report_label)
        layout.addWidget(self._latest_label)
        layout.addWidget(self._done_button, alignment=Qt.AlignmentFlag.AlignCenter)
        self.setMinimumWidth(420)

        self.setStyleSheet(
            """
            QWidget#PromptCard {
                background-color: rgba(24, 24, 28, 0.92);
                border-radius: 12px;
            }
            QWidget#PromptCard QLabel#PromptText {
                color: white;
                font-size: 32px;
                font-weight: bold;
            }
            QWidget#PromptCard QLabel#StatusReport {
                color: rgba(255, 255, 255, 0.85);
                font-size: 24px;
            }
            QWidget#PromptCard QLabel#LatestUpdate {
                color: rgba(255, 255, 255, 0.70);
                font-size: 18px;
            }
            """
        )

    def render(self, prompt: str | None, status_report: str, latest_update: str) -> None:
        """Refresh all three text lines from scheduler state."""
        self._prompt_label.setText(prompt or "")
        self._prompt_label.setVisible(bool(prompt))
        self._report_label.setText(status_report)
        self._latest_label.setText(latest_update)
        self._done_button.setEnabled(prompt is not None)
        self.adjustSize()

    def present(self) -> None:
        """Show the window without stealing focus from other applications."""
        if not self.isVisible():
            self._position_top_center()
            self.show()

    def emphasize(self) -> None:
        """Bring the window to the front of every other window."""
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def relax(self) -> None:
        """Drop the stays-on-top flag set by ``emphasize``."""
        if self.windowFlags() & Qt.WindowType.WindowStaysOnTopHint:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, False)
            self.show()

    def _position_top_center(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        x = geometry.left() + (geometry.width() - self.width()) // 2
        y = geometry.top() + 40
        self.move(QPoint(x, y))

    def closeEvent(self, event) -> None:  # noqa: N802
        self.closed.emit()
        super().closeEvent(event)
