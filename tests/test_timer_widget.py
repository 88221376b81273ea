"""Tests for the timer card and main window wiring."""

from __future__ import annotations

import pytest

from focusdeck.app import FocusDeckApp, STATUS_MESSAGES
from focusdeck.settings import Settings
from focusdeck.timer.snapshot import TimerMode, TimerSnapshot
from focusdeck.ui.progress_ring import ProgressRing
from focusdeck.ui.styles import (
    RING_BREAK, RING_IDLE, RING_PAUSED, RING_WORK, STATE_COLORS,
    build_stylesheet, ring_state,
)
from focusdeck.ui.timer_widget import TimerWidget, format_clock, status_text

from helpers import complete_phase


# ═══════════════════════════════════════════════════════════════════════
#  PURE HELPERS
# ═══════════════════════════════════════════════════════════════════════


class TestFormatting:
    @pytest.mark.parametrize("seconds, text", [
        (0, "00:00"),
        (59, "00:59"),
        (1500, "25:00"),
        (3725, "62:05"),
        (-4, "00:00"),
    ])
    def test_format_clock(self, seconds, text):
        assert format_clock(seconds) == text

    def test_status_text(self):
        assert status_text(TimerSnapshot(), 1500) == "Ready to focus"
        assert status_text(
            TimerSnapshot(mode=TimerMode.BREAK, time_remaining=300), 300,
        ) == "Ready for break"
        assert status_text(TimerSnapshot(time_remaining=10), 1500) == "Paused"
        assert status_text(
            TimerSnapshot(is_running=True, deadline=1), 1500,
        ) == "Focus time..."
        assert status_text(
            TimerSnapshot(mode=TimerMode.BREAK, is_running=True, deadline=1), 300,
        ) == "Break time!"

    def test_ring_state(self):
        assert ring_state(TimerSnapshot(), 1500) == RING_IDLE
        assert ring_state(TimerSnapshot(time_remaining=3), 1500) == RING_PAUSED
        assert ring_state(
            TimerSnapshot(is_running=True, deadline=1), 1500,
        ) == RING_WORK
        assert ring_state(
            TimerSnapshot(mode=TimerMode.BREAK, is_running=True, deadline=1), 300,
        ) == RING_BREAK


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerWidget:
    def test_initial_display(self, engine):
        w = TimerWidget(engine)
        assert w._ring.time_text == "25:00"
        assert w._ring.state_label == "FOCUS"
        assert w._start_pause_btn.text() == "Start"
        assert w._status_label.text() == "Ready to focus"

    def test_button_toggles_engine(self, engine):
        w = TimerWidget(engine)
        w._start_pause_btn.click()
        assert engine.is_running is True
        assert w._start_pause_btn.text() == "Pause"
        w._start_pause_btn.click()
        assert engine.is_running is False
        assert w._start_pause_btn.text() == "Start"

    def test_reset_button(self, engine, clock):
        w = TimerWidget(engine)
        engine.start()
        clock.advance(30)
        w._reset_btn.click()
        assert engine.is_running is False
        assert engine.remaining == 1500

    def test_tick_updates_time(self, engine, clock):
        w = TimerWidget(engine)
        engine.start()
        clock.advance(65)
        engine.check()
        assert w._ring.time_text == "23:55"
        assert w._ring.percent == pytest.approx(65 / 1500)

    def test_completion_switches_to_break(self, engine, clock):
        w = TimerWidget(engine)
        complete_phase(engine, clock)
        assert w._ring.state_label == "BREAK"
        assert w._ring.time_text == "05:00"
        assert w._ring.ring_state == RING_IDLE
        assert w._status_label.text() == "Ready for break"


@pytest.mark.usefixtures("qapp")
class TestProgressRing:
    def test_arc_colour_follows_state(self):
        ring = ProgressRing()
        assert ring.arc_color.name().upper() == STATE_COLORS[RING_IDLE]
        ring.apply_state(RING_WORK)
        assert ring.ring_state == RING_WORK
        assert ring.arc_color.name().upper() == STATE_COLORS[RING_WORK]

    def test_unknown_state_looks_idle(self):
        ring = ProgressRing()
        ring.apply_state(RING_BREAK)
        ring.apply_state("sleeping")
        assert ring.ring_state == RING_IDLE

    def test_percent_is_clamped(self):
        ring = ProgressRing()
        ring.set_percent(1.7)
        assert ring.percent == 1.0
        ring.set_percent(-0.2)
        assert ring.percent == 0.0

    def test_paints_every_state(self):
        ring = ProgressRing()
        ring.set_time_text("12:34")
        ring.set_state_label("FOCUS")
        ring.set_sessions_text("Sessions: 2")
        ring.set_percent(0.5)
        for state in STATE_COLORS:
            ring.apply_state(state)
            assert not ring.grab().isNull()

    def test_running_widget_uses_work_colour(self, engine):
        w = TimerWidget(engine)
        engine.start()
        assert w._ring.ring_state == RING_WORK
        assert w._ring.arc_color.name().upper() == STATE_COLORS[RING_WORK]


def test_stylesheet_styles_widget_object_names():
    qss = build_stylesheet()
    for name in ("QFrame#card", "QLabel#statusLabel",
                 "QPushButton#primaryButton", "QPushButton#dangerButton"):
        assert name in qss


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestMainWindow:
    def test_notifications_reach_tray(self, engine, clock, monkeypatch):
        window = FocusDeckApp(engine, Settings())
        shown = []
        monkeypatch.setattr(
            window._tray_icon, "showMessage",
            lambda title, body: shown.append((title, body)),
        )
        complete_phase(engine, clock)
        assert shown == [(
            "Focus Session Complete!",
            "Great work! Time for a 5-minute break. Sessions: 1",
        )]
        window.close()

    def test_notifications_can_be_disabled(self, engine, clock, monkeypatch):
        window = FocusDeckApp(engine, Settings(notifications_enabled=False))
        shown = []
        monkeypatch.setattr(
            window._tray_icon, "showMessage",
            lambda title, body: shown.append((title, body)),
        )
        complete_phase(engine, clock)
        assert shown == []
        window.close()

    def test_status_bar_follows_state(self, engine):
        window = FocusDeckApp(engine, Settings())
        assert window._status_bar.currentMessage() == STATUS_MESSAGES[
            (TimerMode.WORK, False)
        ]
        engine.start()
        assert window._status_bar.currentMessage() == "Focusing..."
        assert window._tray_start_action.text() == "Pause"
        window.close()

    def test_tray_toggle(self, engine):
        window = FocusDeckApp(engine, Settings())
        window._tray_toggle_start()
        assert engine.is_running is True
        window._tray_toggle_start()
        assert engine.is_running is False
        window.close()

    def test_storage_error_shows_neutral_message(self, engine):
        window = FocusDeckApp(engine, Settings())
        engine.storage_error.emit(OSError("disk gone"))
        assert window._status_bar.currentMessage() == "Timer storage unavailable"
        window.close()
