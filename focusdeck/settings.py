"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FocusDeck/settings.json

Usage::

    settings = load_settings()
    settings.work_duration = 50 * 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.snapshot import TimerMode

logger = logging.getLogger(__name__)

# Same directory as the database
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FocusDeck"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = 25 * 60           # seconds
    break_duration: int = 5 * 60
    tick_interval_ms: int = 1000

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 560
    always_on_top: bool = False

    def durations(self) -> dict[TimerMode, int]:
        return {
            TimerMode.WORK: self.work_duration,
            TimerMode.BREAK: self.break_duration,
        }


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
