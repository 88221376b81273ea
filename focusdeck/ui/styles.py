"""Colours and the window stylesheet."""

from __future__ import annotations

from ..timer.snapshot import TimerMode, TimerSnapshot

# counting down in either mode, stopped part-way, stopped on a fresh phase
RING_WORK = "work"
RING_BREAK = "break"
RING_PAUSED = "paused"
RING_IDLE = "idle"

STATE_COLORS: dict[str, str] = {
    RING_WORK: "#E8684A",
    RING_BREAK: "#3FB8AF",
    RING_PAUSED: "#8A8FA3",
    RING_IDLE: "#55586B",
}


def ring_state(snapshot: TimerSnapshot, total: int) -> str:
    if snapshot.is_running:
        return RING_WORK if snapshot.mode == TimerMode.WORK else RING_BREAK
    if snapshot.time_remaining >= total:
        return RING_IDLE
    return RING_PAUSED


PALETTE: dict[str, str] = {
    "bg": "#1E1F29",
    "card": "#282A36",
    "text": "#ECEDF3",
    "text_muted": "#8A8FA3",
    "accent": "#E8684A",
    "danger": "#E0607E",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    """QSS for the object names set by :class:`~focusdeck.ui.timer_widget.TimerWidget`."""
    p = palette or PALETTE
    return f"""
    QWidget {{ background-color: {p['bg']}; color: {p['text']}; }}
    QFrame#card {{ background-color: {p['card']}; border-radius: 14px; }}
    QLabel#statusLabel {{ color: {p['text_muted']}; font-size: 13px; }}
    QPushButton#primaryButton {{
        background-color: {p['accent']}; color: {p['bg']};
        border: none; border-radius: 10px; padding: 12px 36px;
        font-size: 16px; font-weight: 700;
    }}
    QPushButton#dangerButton {{
        background-color: transparent; color: {p['danger']};
        border: 1px solid {p['danger']}; border-radius: 10px;
        padding: 8px 16px;
    }}
    """
