"""Database package."""

from .db import get_session, init_db
from .models import StoredRecord
from .store import Store, SqlStore, MemoryStore

__all__ = [
    "get_session", "init_db", "StoredRecord",
    "Store", "SqlStore", "MemoryStore",
]
