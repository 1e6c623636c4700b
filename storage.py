# storage.py
"""Key-value backends for the persisted answer ledger."""

from __future__ import annotations

import os
from typing import Dict, Optional

from db import SessionLocal
from models import StoredBlob

STORAGE_KIND = os.getenv("QUIZ_STORAGE", "sql")


class MemoryStorage:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlStorage:
    """One row per key in ``kv_store``. Errors propagate; the session logs them."""

    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            row = db.get(StoredBlob, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            row = db.get(StoredBlob, key)
            if row is None:
                db.add(StoredBlob(key=key, value=value))
            else:
                row.value = value
            db.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            row = db.get(StoredBlob, key)
            if row is not None:
                db.delete(row)
                db.commit()


def make_storage(kind: Optional[str] = None):
    kind = (kind or STORAGE_KIND).lower()
    if kind == "memory":
        return MemoryStorage()
    if kind == "sql":
        return SqlStorage()
    raise ValueError(f"Unknown QUIZ_STORAGE backend: {kind!r} (expected 'sql' or 'memory')")
