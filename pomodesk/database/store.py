"""Generic string key-value store on top of the ``stored_values`` table."""

from __future__ import annotations

from .db import get_session
from .models import StoredValue


class KeyValueStore:
    """``get``/``set``/``delete`` of text blobs by key."""

    def get(self, key: str) -> str | None:
        with get_session() as db:
            row = db.get(StoredValue, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with get_session() as db:
            row = db.get(StoredValue, key)
            if row is None:
                db.add(StoredValue(key=key, value=value))
            else:
                row.value = value

    def delete(self, key: str) -> None:
        with get_session() as db:
            row = db.get(StoredValue, key)
            if row is not None:
                db.delete(row)
