"""Focus timer card: the engine's presentation adapter.

Layout (top → bottom):
    - ProgressRing (time, mode label, session count)
    - Status line ("Focus time...", "Ready for break", ...)
    - Reset + Start/Pause buttons

The widget only reads engine state and calls ``start``/``pause``/``reset``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QSizePolicy,
)

from ..timer.engine import TimerEngine
from ..timer.snapshot import TimerMode, TimerSnapshot
from .progress_ring import ProgressRing
from .styles import ring_state


MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.WORK:  "FOCUS",
    TimerMode.BREAK: "BREAK",
}


def format_clock(seconds: int) -> str:
    """``MM:SS``; minutes keep counting past 59."""
    minutes, seconds = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


def status_text(snapshot: TimerSnapshot, total: int) -> str:
    if snapshot.is_running:
        return "Focus time..." if snapshot.mode == TimerMode.WORK else "Break time!"
    if snapshot.time_remaining >= total:
        return "Ready to focus" if snapshot.mode == TimerMode.WORK else "Ready for break"
    return "Paused"


class TimerWidget(QWidget):
    """The timer card shown in the main window."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.snapshot)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        ring_container = QHBoxLayout()
        ring_container.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(
            QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed,
        )
        self._ring.setFixedSize(300, 300)
        ring_container.addWidget(self._ring)
        layout.addLayout(ring_container)

        layout.addSpacing(8)

        self._status_label = QLabel("", card)
        self._status_label.setObjectName("statusLabel")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status_label)

        layout.addSpacing(16)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._on_tick)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_tick(self, remaining: int, mode: TimerMode) -> None:
        self._refresh_display(remaining)

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        total = self._engine.duration_for(snapshot.mode)
        self._start_pause_btn.setText("Pause" if snapshot.is_running else "Start")
        self._ring.set_state_label(MODE_LABELS[snapshot.mode])
        self._ring.set_sessions_text(f"Sessions: {snapshot.sessions_completed}")
        self._ring.apply_state(ring_state(snapshot, total))
        self._status_label.setText(status_text(snapshot, total))
        self._refresh_display(self._engine.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._ring.set_time_text(format_clock(remaining))
        self._ring.set_percent(self._engine.percent_complete)
