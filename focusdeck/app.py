"""Main application window for FocusDeck."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon, QImage, QPainter, QColor, QPen, QPixmap
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QStatusBar,
    QSystemTrayIcon, QMenu,
)

from .settings import Settings
from .timer.engine import TimerEngine
from .timer.snapshot import TimerMode, TimerSnapshot
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget, format_clock

logger = logging.getLogger(__name__)


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(snapshot: TimerSnapshot) -> QIcon:
    """Generate a 32×32 monochrome template icon for the menu bar.

    - running work:   filled circle
    - running break:  circle outline with a centre dot
    - stopped:        circle outline
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if snapshot.is_running and snapshot.mode == TimerMode.WORK:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if snapshot.is_running:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(colour)
            dot_r = 6
            p.drawEllipse(cx - dot_r, cy - dot_r, dot_r * 2, dot_r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


STATUS_MESSAGES: dict[tuple[TimerMode, bool], str] = {
    (TimerMode.WORK, True):   "Focusing...",
    (TimerMode.BREAK, True):  "On a break",
    (TimerMode.WORK, False):  "Ready when you are!",
    (TimerMode.BREAK, False): "Break is waiting for you",
}


class FocusDeckApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        engine: TimerEngine,
        settings: Settings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("FocusDeck")
        self.resize(settings.window_width, settings.window_height)

        self._settings = settings
        self._timer_engine = engine
        self.setStyleSheet(build_stylesheet())
        if settings.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)

        self._timer_widget = TimerWidget(engine, central)
        root_layout.addWidget(self._timer_widget)
        root_layout.addStretch()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        # ── system tray icon ──────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(engine.snapshot))
        self._tray_icon.setToolTip("FocusDeck")
        self._tray_icon.activated.connect(self._on_tray_activated)
        self._build_tray_menu()
        self._tray_icon.show()

        # ── wire signals ──────────────────────────────────────────────
        engine.state_changed.connect(self._on_state_changed)
        engine.tick.connect(self._on_tick)
        engine.notification_requested.connect(self._send_notification)
        engine.storage_error.connect(self._on_storage_error)

        self._on_state_changed(engine.snapshot)

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self._tray_toggle_start)

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(self._timer_engine.reset)

        menu.addSeparator()

        show_action = menu.addAction("Show FocusDeck")
        show_action.triggered.connect(self._show_window)

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)

    def _tray_toggle_start(self) -> None:
        if self._timer_engine.is_running:
            self._timer_engine.pause()
        else:
            self._timer_engine.start()

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → bring the window forward."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._tray_icon.hide()
        QApplication.instance().quit()

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _send_notification(self, title: str, body: str) -> None:
        """Show a desktop notification via the tray icon."""
        if not self._settings.notifications_enabled:
            return
        self._tray_icon.showMessage(title, body)

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        self._status_bar.showMessage(
            STATUS_MESSAGES[(snapshot.mode, snapshot.is_running)]
        )
        self._tray_icon.setIcon(_make_tray_icon(snapshot))
        self._tray_start_action.setText("Pause" if snapshot.is_running else "Start")
        if not snapshot.is_running:
            self._tray_icon.setToolTip("FocusDeck")

    def _on_tick(self, remaining: int, mode: TimerMode) -> None:
        label = "Focusing" if mode == TimerMode.WORK else "Break"
        self._tray_icon.setToolTip(f"FocusDeck — {label} {format_clock(remaining)}")

    def _on_storage_error(self, error: Exception) -> None:
        self._status_bar.showMessage("Timer storage unavailable", 5000)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Closing the window quits; the timer state is already on disk."""
        self._tray_icon.hide()
        event.accept()
