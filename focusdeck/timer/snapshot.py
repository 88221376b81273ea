"""Timer snapshot: the single persisted record of the focus timer.

A snapshot is either *paused* (``time_remaining`` is the truth) or
*running* (``deadline`` is the truth).  The deadline is an absolute
epoch-millisecond instant, so a running snapshot stays correct however
long the app was closed or the machine was asleep.

Blob format (one JSON object under ``SNAPSHOT_KEY``)::

    {
        "mode": "work" | "break",
        "sessions_completed": 3,
        "is_running": true,
        "time_remaining": 1500,
        "deadline": 1760000000000
    }
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerMode(Enum):
    WORK = "work"
    BREAK = "break"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[TimerMode, int] = {
    TimerMode.WORK: 25 * 60,
    TimerMode.BREAK: 5 * 60,
}

SNAPSHOT_KEY = "focusdeck_timer"


def merge_durations(
    durations: Mapping[TimerMode, int] | None = None,
) -> dict[TimerMode, int]:
    """Overrides from *durations* on top of the defaults, every mode present."""
    merged = dict(DEFAULT_DURATIONS)
    if durations:
        merged.update(durations)
    return merged


# ── entity ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Complete timer state at one instant."""

    mode: TimerMode = TimerMode.WORK
    sessions_completed: int = 0
    is_running: bool = False
    time_remaining: int = DEFAULT_DURATIONS[TimerMode.WORK]
    deadline: int | None = None  # epoch ms, only while running

    @classmethod
    def initial(
        cls, durations: Mapping[TimerMode, int] | None = None,
    ) -> "TimerSnapshot":
        return cls(time_remaining=merge_durations(durations)[TimerMode.WORK])


# ── codec ─────────────────────────────────────────────────────────────────


def encode_snapshot(snapshot: TimerSnapshot) -> dict[str, Any]:
    """Turn a snapshot into a JSON-safe dict for the store."""
    return {
        "mode": snapshot.mode.value,
        "sessions_completed": snapshot.sessions_completed,
        "is_running": snapshot.is_running,
        "time_remaining": snapshot.time_remaining,
        "deadline": snapshot.deadline,
    }


def _non_negative_int(value: Any) -> int | None:
    # bool is an int subclass; a stray true/false is not a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.loads accepts Infinity and NaN
    if not math.isfinite(value) or value < 0:
        return None
    return int(value)


def decode_snapshot(
    raw: Any,
    durations: Mapping[TimerMode, int] | None = None,
) -> TimerSnapshot:
    """Rebuild a snapshot from a stored blob.

    Never raises.  A missing record yields the initial snapshot; each
    missing or malformed field falls back to its own default, so records
    written by older versions still load.  A deadline in the past is kept
    as-is -- catching up on it is :func:`~focusdeck.timer.engine.reconcile`'s
    job, not the codec's.
    """
    durations = merge_durations(durations)
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug("Ignoring non-mapping timer record: %r", raw)
        return TimerSnapshot.initial(durations)

    try:
        mode = TimerMode(raw.get("mode"))
    except (ValueError, TypeError):
        logger.debug("Unknown timer mode %r, using work", raw.get("mode"))
        mode = TimerMode.WORK

    sessions = _non_negative_int(raw.get("sessions_completed"))
    if sessions is None:
        sessions = 0

    remaining = _non_negative_int(raw.get("time_remaining"))
    if remaining is None:
        remaining = durations[mode]

    deadline = _non_negative_int(raw.get("deadline"))
    is_running = raw.get("is_running") is True and deadline is not None

    return TimerSnapshot(
        mode=mode,
        sessions_completed=sessions,
        is_running=is_running,
        time_remaining=remaining,
        deadline=deadline if is_running else None,
    )
