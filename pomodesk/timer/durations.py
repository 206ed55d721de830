"""Timer modes and the per-mode duration table.

Every value that reaches a ``DurationTable`` goes through
``clamp_duration`` first, so the table only ever holds
``MIN_DURATION <= seconds <= MAX_DURATIONS[mode]``.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Mapping


class Mode(Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short"
    LONG_BREAK = "long"

    @property
    def is_break(self) -> bool:
        return self is not Mode.FOCUS


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[Mode, int] = {
    Mode.FOCUS: 25 * 60,
    Mode.SHORT_BREAK: 5 * 60,
    Mode.LONG_BREAK: 15 * 60,
}

MIN_DURATION = 60

# 120 / 30 / 60 minute UI bounds
MAX_DURATIONS: dict[Mode, int] = {
    Mode.FOCUS: 120 * 60,
    Mode.SHORT_BREAK: 30 * 60,
    Mode.LONG_BREAK: 60 * 60,
}

# Serialized field names, one per mode
BLOB_FIELDS: dict[Mode, str] = {
    Mode.FOCUS: "focusSeconds",
    Mode.SHORT_BREAK: "shortSeconds",
    Mode.LONG_BREAK: "longSeconds",
}


def clamp_duration(mode: Mode, seconds: object) -> int:
    """Coerce *seconds* into the valid range for *mode*.

    Non-numeric input (``None``, strings, bools) yields the mode's
    default rather than an error.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return DEFAULT_DURATIONS[mode]
    if seconds != seconds:  # NaN
        return DEFAULT_DURATIONS[mode]
    return int(max(MIN_DURATION, min(seconds, MAX_DURATIONS[mode])))


class DurationTable:
    """Mutable ``Mode -> seconds`` mapping with clamping on write."""

    def __init__(self, values: Mapping[Mode, object] | None = None) -> None:
        self._seconds: dict[Mode, int] = dict(DEFAULT_DURATIONS)
        if values:
            for mode, seconds in values.items():
                self.set(mode, seconds)

    def get(self, mode: Mode) -> int:
        return self._seconds[mode]

    def set(self, mode: Mode, seconds: object) -> int:
        """Store a clamped value and return what was actually stored."""
        value = clamp_duration(mode, seconds)
        self._seconds[mode] = value
        return value

    def __getitem__(self, mode: Mode) -> int:
        return self._seconds[mode]

    def __iter__(self) -> Iterator[Mode]:
        return iter(self._seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DurationTable):
            return NotImplemented
        return self._seconds == other._seconds

    def __repr__(self) -> str:
        inner = ", ".join(f"{m.value}={s}" for m, s in self._seconds.items())
        return f"<DurationTable {inner}>"

    def copy(self) -> DurationTable:
        return DurationTable(self._seconds)

    def as_dict(self) -> dict[Mode, int]:
        return dict(self._seconds)

    # ── serialization ─────────────────────────────────────────────────

    def to_blob(self) -> dict[str, int]:
        return {BLOB_FIELDS[m]: s for m, s in self._seconds.items()}

    @classmethod
    def from_blob(cls, data: object) -> DurationTable:
        """Build a table from a decoded blob; each field falls back alone."""
        table = cls()
        if not isinstance(data, dict):
            return table
        for mode, key in BLOB_FIELDS.items():
            if key in data:
                table.set(mode, data[key])
        return table
