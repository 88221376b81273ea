"""Allow running FocusDeck as a module: python -m focusdeck."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import FocusDeckApp
from .database.db import init_db
from .database.store import SqlStore
from .log import configure_logging
from .settings import APP_SUPPORT_DIR, load_settings
from .timer.engine import TimerEngine

logger = logging.getLogger("focusdeck")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level, APP_SUPPORT_DIR / "focusdeck.log")
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("FocusDeck")
    app.setOrganizationName("FocusDeck")

    engine = TimerEngine(
        SqlStore(),
        durations=settings.durations(),
        tick_interval_ms=settings.tick_interval_ms,
    )
    if engine.restore():
        logger.info("Caught up on a phase that finished while FocusDeck was closed")

    window = FocusDeckApp(engine, settings)
    window.show()
    logger.info("FocusDeck ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
