"""Timer package."""

from .clock import Clock, SystemClock
from .durations import (
    Mode,
    DurationTable,
    DEFAULT_DURATIONS,
    MAX_DURATIONS,
    MIN_DURATION,
    clamp_duration,
)
from .engine import (
    TimerEngine,
    TimerSnapshot,
    CompletionEvent,
    ROUNDS_PER_CYCLE,
)
from .driver import TickDriver

__all__ = [
    "Clock",
    "SystemClock",
    "Mode",
    "DurationTable",
    "DEFAULT_DURATIONS",
    "MAX_DURATIONS",
    "MIN_DURATION",
    "clamp_duration",
    "TimerEngine",
    "TimerSnapshot",
    "CompletionEvent",
    "ROUNDS_PER_CYCLE",
    "TickDriver",
]
