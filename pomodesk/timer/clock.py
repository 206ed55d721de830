"""Wall-clock source for the timer engine."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Current time as a timezone-aware local ``datetime``."""


class SystemClock:
    """Reads the operating-system clock.

    Aware datetimes subtract exactly across DST changes, so the
    remaining time of a running interval never jumps by an hour.
    """

    def now(self) -> datetime:
        return datetime.now().astimezone()
