"""Shared pytest fixtures for FocusDeck tests."""

import os
import sys
import pytest

# No display in CI; must be set before the QApplication exists.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from focusdeck.database.db import configure_engine, init_db
from focusdeck.database.store import MemoryStore
from focusdeck.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(qapp, store, clock):
    """Fresh TimerEngine on an empty in-memory store and a fake clock."""
    eng = TimerEngine(store, clock)
    yield eng
    eng.reset()


@pytest.fixture
def short_engine(qapp, store, clock):
    """TimerEngine with a 60 s work phase and 30 s break."""
    from focusdeck.timer.snapshot import TimerMode

    eng = TimerEngine(
        store, clock, durations={TimerMode.WORK: 60, TimerMode.BREAK: 30},
    )
    yield eng
    eng.reset()
