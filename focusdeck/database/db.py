"""SQLite location and session handling."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FocusDeck"
DB_PATH = APP_SUPPORT_DIR / "focusdeck.db"

# bound on first use, or earlier by configure_engine()
_factory = sessionmaker(expire_on_commit=False)


def _bind(url: str) -> Engine:
    engine = create_engine(url, connect_args={"check_same_thread": False})
    _factory.configure(bind=engine)
    return engine


def _bound_engine() -> Engine:
    engine = _factory.kw.get("bind")
    if engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        engine = _bind(f"sqlite:///{DB_PATH}")
    return engine


def configure_engine(url: str) -> None:
    """Point every later session at *url* (tests use ``sqlite:///:memory:``)."""
    _bind(url)


def init_db() -> None:
    Base.metadata.create_all(_bound_engine())


@contextmanager
def get_session() -> Iterator[Session]:
    """A session inside one transaction: committed on exit, rolled back on error."""
    _bound_engine()
    with _factory() as session, session.begin():
        yield session
