"""Key/value stores the widgets persist into.

A store maps string keys to JSON-compatible values:

    store.get(["focusdeck_timer"])  ->  {"focusdeck_timer": {...}}
    store.set({"focusdeck_timer": {...}})

Keys that have never been written are simply absent from ``get``'s
result.  Callers treat ``set`` as fire-and-forget: nothing reads its
result and a failure never rolls back in-memory state.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Iterable, Mapping, Protocol

from .db import get_session
from .models import StoredRecord

logger = logging.getLogger(__name__)


class Store(Protocol):
    def get(self, keys: Iterable[str]) -> dict[str, Any]: ...

    def set(self, record: Mapping[str, Any]) -> None: ...


class SqlStore:
    """Store backed by the ``stored_records`` table."""

    def get(self, keys: Iterable[str]) -> dict[str, Any]:
        wanted = list(keys)
        if not wanted:
            return {}
        result: dict[str, Any] = {}
        with get_session() as db:
            rows = (
                db.query(StoredRecord)
                .filter(StoredRecord.key.in_(wanted))
                .all()
            )
            for row in rows:
                try:
                    result[row.key] = json.loads(row.value)
                except ValueError:
                    logger.warning("Discarding unreadable record %r", row.key)
        return result

    def set(self, record: Mapping[str, Any]) -> None:
        with get_session() as db:
            for key, value in record.items():
                db.merge(StoredRecord(key=key, value=json.dumps(value)))


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))

    def get(self, keys: Iterable[str]) -> dict[str, Any]:
        return {
            key: copy.deepcopy(self._data[key])
            for key in keys if key in self._data
        }

    def set(self, record: Mapping[str, Any]) -> None:
        for key, value in record.items():
            self._data[key] = copy.deepcopy(value)
