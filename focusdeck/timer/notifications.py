"""Notification wording for completed phases."""

from __future__ import annotations

from typing import Mapping

from .snapshot import TimerMode, merge_durations


def _minutes(seconds: int) -> str:
    minutes, rest = divmod(seconds, 60)
    return str(minutes) if rest == 0 else f"{seconds / 60:.1f}"


def phase_notification(
    previous_mode: TimerMode,
    sessions_completed: int,
    durations: Mapping[TimerMode, int] | None = None,
) -> tuple[str, str]:
    """``(title, body)`` announcing that *previous_mode* just ended."""
    durations = merge_durations(durations)
    if previous_mode == TimerMode.WORK:
        return (
            "Focus Session Complete!",
            f"Great work! Time for a {_minutes(durations[TimerMode.BREAK])}"
            f"-minute break. Sessions: {sessions_completed}",
        )
    return (
        "Break Over!",
        f"Ready to start another {_minutes(durations[TimerMode.WORK])}"
        f"-minute focus session?",
    )
