"""Timer package."""

from .clock import Clock, system_now_ms
from .engine import TimerEngine, TICK_INTERVAL_MS, reconcile
from .notifications import phase_notification
from .snapshot import (
    TimerMode,
    TimerSnapshot,
    DEFAULT_DURATIONS,
    SNAPSHOT_KEY,
    encode_snapshot,
    decode_snapshot,
    merge_durations,
)

__all__ = [
    "Clock",
    "system_now_ms",
    "TimerEngine",
    "TICK_INTERVAL_MS",
    "reconcile",
    "phase_notification",
    "TimerMode",
    "TimerSnapshot",
    "DEFAULT_DURATIONS",
    "SNAPSHOT_KEY",
    "encode_snapshot",
    "decode_snapshot",
    "merge_durations",
]
