"""Load and save the timer's persistent blobs.

Three independent JSON blobs are kept in the key-value store:

- ``pomodoroSettings``  ``{"focusSeconds": .., "shortSeconds": .., "longSeconds": ..}``
- ``pomodoroHistory``   ``{"YYYY-MM-DD": count, ...}``
- ``pomodoroTheme``     ``"light"`` or ``"dark"``

Loading never raises.  A missing or malformed blob (or a single bad
field inside one) falls back to its default.
"""

from __future__ import annotations

import json
import logging
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError

from .database.store import KeyValueStore
from .history.ledger import HistoryLedger
from .theme import DEFAULT_THEME, Theme
from .timer.durations import DurationTable

log = logging.getLogger(__name__)

STORAGE_KEYS = {
    "durations": "pomodoroSettings",
    "history": "pomodoroHistory",
    "theme": "pomodoroTheme",
}

_MISSING = object()


class PersistenceAdapter:
    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store or KeyValueStore()

    # ── durations ─────────────────────────────────────────────────────

    def load_durations(self) -> DurationTable:
        return DurationTable.from_blob(self._read(STORAGE_KEYS["durations"]))

    def save_durations(self, durations: DurationTable | Mapping) -> None:
        if not isinstance(durations, DurationTable):
            durations = DurationTable(durations)
        self._write(STORAGE_KEYS["durations"], durations.to_blob())

    # ── history ───────────────────────────────────────────────────────

    def load_history(self) -> HistoryLedger:
        return HistoryLedger.from_blob(self._read(STORAGE_KEYS["history"]))

    def save_history(self, history: HistoryLedger | Mapping[str, int]) -> None:
        if isinstance(history, HistoryLedger):
            history = history.as_dict()
        self._write(STORAGE_KEYS["history"], dict(history))

    # ── theme ─────────────────────────────────────────────────────────

    def load_theme(self) -> Theme:
        raw = self._read(STORAGE_KEYS["theme"])
        try:
            return Theme(raw)
        except ValueError:
            if raw is not _MISSING:
                log.warning("Unknown theme %r, using %s", raw, DEFAULT_THEME.value)
            return DEFAULT_THEME

    def save_theme(self, theme: Theme) -> None:
        self._write(STORAGE_KEYS["theme"], theme.value)

    # ── internal ──────────────────────────────────────────────────────

    def _read(self, key: str) -> object:
        try:
            text = self._store.get(key)
        except SQLAlchemyError as exc:
            log.warning("Could not read %s: %s", key, exc)
            return _MISSING
        if text is None:
            return _MISSING
        try:
            return json.loads(text)
        except ValueError:
            log.warning("Malformed blob under %s, using defaults", key)
            return _MISSING

    def _write(self, key: str, value: object) -> None:
        self._store.set(key, json.dumps(value, sort_keys=True))
