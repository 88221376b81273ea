"""Work/break timer state machine for FocusDeck.

States
------
Each mode (WORK, BREAK) crossed with RUNNING / PAUSED.  Start state is
``WORK, PAUSED`` with the full work duration.  No terminal state.

Transitions
-----------
(mode, PAUSED)    → (mode, RUNNING)     start
(mode, RUNNING)   → (mode, PAUSED)      pause
(mode, *)         → (mode, PAUSED)      reset (full duration)
(WORK, RUNNING)   → (BREAK, PAUSED)     deadline reached (+1 session)
(BREAK, RUNNING)  → (WORK, PAUSED)      deadline reached

Timekeeping
-----------
While running, the only source of truth is an absolute ``deadline`` in
epoch milliseconds.  Remaining time is always recomputed from the clock,
never decremented, so a missed tick (sleep, suspended event loop) costs
nothing.  The snapshot is written to the store after every transition
and :meth:`TimerEngine.restore` rebuilds it on the next launch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Mapping

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..database.store import Store
from .clock import Clock, system_now_ms
from .notifications import phase_notification
from .snapshot import (
    SNAPSHOT_KEY,
    TimerMode,
    TimerSnapshot,
    decode_snapshot,
    encode_snapshot,
    merge_durations,
)

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000

_NEXT_MODE: dict[TimerMode, TimerMode] = {
    TimerMode.WORK: TimerMode.BREAK,
    TimerMode.BREAK: TimerMode.WORK,
}


# ── pure helpers ──────────────────────────────────────────────────────────


def seconds_until(deadline: int, now_ms: int) -> int:
    """Whole seconds left before *deadline*, rounded up, never negative."""
    return max(0, math.ceil((deadline - now_ms) / 1000))


def advance_phase(
    snapshot: TimerSnapshot, durations: Mapping[TimerMode, int],
) -> TimerSnapshot:
    """The paused snapshot that follows completing the current phase."""
    sessions = snapshot.sessions_completed
    if snapshot.mode == TimerMode.WORK:
        sessions += 1
    next_mode = _NEXT_MODE[snapshot.mode]
    return TimerSnapshot(
        mode=next_mode,
        sessions_completed=sessions,
        is_running=False,
        time_remaining=durations[next_mode],
        deadline=None,
    )


def reconcile(
    snapshot: TimerSnapshot,
    now_ms: int,
    durations: Mapping[TimerMode, int] | None = None,
) -> tuple[TimerSnapshot, bool]:
    """Bring a stored snapshot up to date with the wall clock.

    Returns ``(snapshot, caught_up)``.  A paused snapshot is returned
    untouched.  A running one whose deadline is still ahead keeps
    running against the same deadline.  A running one whose deadline
    has passed gets exactly one phase transition and comes back paused,
    however many phase lengths went by in the meantime.
    """
    durations = merge_durations(durations)
    if not snapshot.is_running or snapshot.deadline is None:
        return snapshot, False

    remaining = seconds_until(snapshot.deadline, now_ms)
    if remaining > 0:
        return replace(snapshot, time_remaining=remaining), False
    return advance_phase(snapshot, durations), True


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based focus timer with a persisted, deadline-driven state machine.

    Signals
    -------
    tick(remaining_seconds: int, mode: TimerMode)
        Emitted on every periodic check while running.
    phase_completed(previous_mode: TimerMode, sessions_completed: int)
        Emitted once per live completion.  Never emitted for a phase that
        ended while the app was closed.
    state_changed(snapshot: TimerSnapshot)
        Emitted after every transition (and after :meth:`restore`).
    notification_requested(title: str, body: str)
        Companion to ``phase_completed`` carrying user-facing text.
    storage_error(error: Exception)
        A store read or write failed.  Control flow is unaffected.
    """

    tick = pyqtSignal(int, object)
    phase_completed = pyqtSignal(object, int)
    state_changed = pyqtSignal(object)
    notification_requested = pyqtSignal(str, str)
    storage_error = pyqtSignal(object)

    def __init__(
        self,
        store: Store,
        clock: Clock = system_now_ms,
        parent: QObject | None = None,
        *,
        durations: Mapping[TimerMode, int] | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._store = store
        self._clock = clock

        # ── configuration ─────────────────────────────────────────────
        self._durations = merge_durations(durations)

        # ── state ─────────────────────────────────────────────────────
        self._snapshot = TimerSnapshot.initial(self._durations)

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def snapshot(self) -> TimerSnapshot:
        return self._snapshot

    @property
    def mode(self) -> TimerMode:
        return self._snapshot.mode

    @property
    def sessions_completed(self) -> int:
        return self._snapshot.sessions_completed

    @property
    def is_running(self) -> bool:
        return self._snapshot.is_running

    @property
    def deadline(self) -> int | None:
        return self._snapshot.deadline

    @property
    def remaining(self) -> int:
        """Seconds left on the clock, live from the deadline when running."""
        if self._snapshot.is_running and self._snapshot.deadline is not None:
            return seconds_until(self._snapshot.deadline, self._clock())
        return self._snapshot.time_remaining

    @property
    def total_duration(self) -> int:
        return self._durations[self._snapshot.mode]

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        elapsed = total - self.remaining
        return max(0.0, min(1.0, elapsed / total))

    def duration_for(self, mode: TimerMode) -> int:
        return self._durations[mode]

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def restore(self) -> bool:
        """Load the last snapshot from the store and reconcile it.

        Returns True when a phase finished while the app was closed and
        was caught up here.  Call once, before the first :meth:`start`.
        """
        try:
            record = self._store.get([SNAPSHOT_KEY]).get(SNAPSHOT_KEY)
        except Exception as exc:
            logger.warning("Could not read timer state, starting fresh: %s", exc)
            self.storage_error.emit(exc)
            record = None

        stored = decode_snapshot(record, self._durations)
        snapshot, caught_up = reconcile(stored, self._clock(), self._durations)
        if caught_up:
            logger.info(
                "%s phase ended while closed; now %s with %d sessions",
                stored.mode.value, snapshot.mode.value,
                snapshot.sessions_completed,
            )
            self._commit(snapshot)
        else:
            self._snapshot = snapshot
            self.state_changed.emit(snapshot)

        if snapshot.is_running:
            self._qt_timer.start()
        return caught_up

    def start(self) -> None:
        """Run the current phase.  No-op if already running."""
        if self._snapshot.is_running:
            return
        deadline = self._clock() + self._snapshot.time_remaining * 1000
        self._commit(replace(self._snapshot, is_running=True, deadline=deadline))
        self._qt_timer.start()

    def pause(self) -> None:
        """Freeze the countdown, keeping the seconds that are left."""
        self._qt_timer.stop()
        if not self._snapshot.is_running:
            return
        self._commit(replace(
            self._snapshot,
            is_running=False,
            time_remaining=self.remaining,
            deadline=None,
        ))

    def reset(self) -> None:
        """Stop and refill the current mode's full duration."""
        self._qt_timer.stop()
        self._commit(replace(
            self._snapshot,
            is_running=False,
            time_remaining=self._durations[self._snapshot.mode],
            deadline=None,
        ))

    def check(self) -> None:
        """One pass of the countdown loop.

        Driven by the internal QTimer, but safe to call from anywhere.
        A call that arrives after pause/reset does nothing.
        """
        if not self._snapshot.is_running or self._snapshot.deadline is None:
            return
        remaining = seconds_until(self._snapshot.deadline, self._clock())
        if remaining > 0:
            self.tick.emit(remaining, self._snapshot.mode)
            return
        # stop before transitioning so completion can only fire once
        self._qt_timer.stop()
        self._finish_phase()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self.check()

    def _finish_phase(self) -> None:
        completed_mode = self._snapshot.mode
        self._commit(advance_phase(self._snapshot, self._durations))
        sessions = self._snapshot.sessions_completed
        logger.info(
            "%s phase complete (%d sessions)", completed_mode.value, sessions,
        )

        self.phase_completed.emit(completed_mode, sessions)
        title, body = phase_notification(
            completed_mode, sessions, self._durations,
        )
        self.notification_requested.emit(title, body)

    def _commit(self, snapshot: TimerSnapshot) -> None:
        self._snapshot = snapshot
        self._persist()
        self.state_changed.emit(snapshot)

    def _persist(self) -> None:
        try:
            self._store.set({SNAPSHOT_KEY: encode_snapshot(self._snapshot)})
        except Exception as exc:
            logger.warning("Could not save timer state: %s", exc)
            self.storage_error.emit(exc)
