"""Timer state machine for Pomodesk.

States
------
IDLE       Not counting down; ``remaining`` is frozen.
RUNNING    Counting down towards ``target_instant``.

Transitions
-----------
IDLE → RUNNING       (start)
RUNNING → IDLE       (pause)
RUNNING → RUNNING    (interval reaches 0: next mode begins at once)
Any → IDLE           (reset / switch_mode)

Countdown
---------
While running, ``remaining`` is always recomputed from the absolute
``target_instant`` and the clock.  Ticks may arrive late or not at all
(sleep, throttled event loop); the next tick simply reads the clock
again, so no elapsed time is ever lost or double counted.

Cycle
-----
Focus → short break → focus → ... and every 4th completed focus
interval (counted across the whole history) is followed by a long
break.  The engine free-runs through the cycle until paused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from PyQt6.QtCore import QObject, pyqtSignal

from ..history.ledger import HistoryLedger, date_key
from .clock import Clock, SystemClock
from .durations import DurationTable, Mode

log = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

ROUNDS_PER_CYCLE = 4

_ONE_SECOND_US = 1_000_000


# ── snapshots ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    mode: Mode
    remaining: int
    is_running: bool
    target_instant: datetime | None
    duration: int


@dataclass(frozen=True)
class CompletionEvent:
    """Payload of ``TimerEngine.session_completed``."""

    finished_mode: Mode
    next_mode: Mode
    next_duration: int
    completed_at: datetime
    date_key: str
    focus_count_today: int
    total_focus_count: int


def seconds_until(target: datetime, now: datetime) -> int:
    """Whole seconds from *now* to *target*, rounded up, never negative."""
    delta_us = (target - now) // timedelta(microseconds=1)
    if delta_us <= 0:
        return 0
    return -(-delta_us // _ONE_SECOND_US)


def next_mode_after(finished: Mode, total_focus_count: int) -> Mode:
    """Mode that follows *finished*.

    *total_focus_count* is the count **after** the finished interval
    was recorded.
    """
    if finished.is_break:
        return Mode.FOCUS
    if total_focus_count > 0 and total_focus_count % ROUNDS_PER_CYCLE == 0:
        return Mode.LONG_BREAK
    return Mode.SHORT_BREAK


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Drift-corrected focus/break timer.

    The engine owns its state and its history ledger; everything that
    leaves it is a copy.  It never schedules its own ticks, see
    ``TickDriver``.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted by every ``tick()`` and whenever ``remaining`` is reset.
    state_changed(snapshot: TimerSnapshot)
        Emitted on start, pause, reset, mode switch and completion.
    session_completed(event: CompletionEvent)
        Emitted once per finished interval, after the next mode has
        been entered.
    durations_changed(durations: dict)
        ``{Mode: seconds}`` after every ``set_duration``.
    history_changed(history: dict)
        ``{date_key: count}`` after every focus completion.
    """

    remaining_changed = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)
    durations_changed = pyqtSignal(object)
    history_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock | None = None,
        durations: DurationTable | None = None,
        history: HistoryLedger | None = None,
        mode: Mode = Mode.FOCUS,
    ) -> None:
        super().__init__(parent)

        self._clock: Clock = clock or SystemClock()
        self._durations: DurationTable = (
            durations.copy() if durations is not None else DurationTable()
        )
        self._history: HistoryLedger = (
            history.copy() if history is not None else HistoryLedger()
        )

        self._mode: Mode = mode
        self._remaining: int = self._durations[mode]
        self._target: datetime | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left, as of the last tick or transition."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._target is not None

    @property
    def target_instant(self) -> datetime | None:
        return self._target

    @property
    def total_duration(self) -> int:
        """Configured seconds for the current mode."""
        return self._durations[self._mode]

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current interval."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        elapsed = total - self._remaining
        return max(0.0, min(1.0, elapsed / total))

    @property
    def total_focus_count(self) -> int:
        return self._history.total()

    @property
    def durations(self) -> DurationTable:
        return self._durations.copy()

    @property
    def history(self) -> HistoryLedger:
        return self._history.copy()

    def duration_for(self, mode: Mode) -> int:
        return self._durations[mode]

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            mode=self._mode,
            remaining=self._remaining,
            is_running=self.is_running,
            target_instant=self._target,
            duration=self.total_duration,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin counting down from ``remaining``.  Only valid from IDLE."""
        if self.is_running:
            return
        self._target = self._clock.now() + timedelta(seconds=self._remaining)
        log.debug("start %s, %ds left", self._mode.value, self._remaining)
        self._emit_state()

    def pause(self) -> None:
        """Freeze the countdown at the clock's current reading."""
        if not self.is_running:
            return
        now = self._clock.now()
        if seconds_until(self._target, now) == 0:
            # Ran out between ticks; credit the interval before freezing.
            self._complete(now)
        self._remaining = seconds_until(self._target, now)
        self._target = None
        log.debug("pause %s, %ds left", self._mode.value, self._remaining)
        self._emit_state()
        self.remaining_changed.emit(self._remaining)

    def tick(self) -> None:
        """Re-read the clock.  Ignored while IDLE."""
        if not self.is_running:
            return
        now = self._clock.now()
        self._remaining = seconds_until(self._target, now)
        self.remaining_changed.emit(self._remaining)
        if self._remaining == 0:
            self._complete(now)

    def switch_mode(self, mode: Mode) -> None:
        """Stop whatever is running and load *mode*'s full duration."""
        self._target = None
        self._mode = mode
        self._remaining = self._durations[mode]
        log.debug("switch to %s", mode.value)
        self._emit_state()
        self.remaining_changed.emit(self._remaining)

    def reset(self) -> None:
        """Stop and restore the current mode's full duration."""
        self._target = None
        self._remaining = self._durations[self._mode]
        log.debug("reset %s", self._mode.value)
        self._emit_state()
        self.remaining_changed.emit(self._remaining)

    def set_duration(self, mode: Mode, seconds: int) -> int:
        """Change a mode's configured length; returns the clamped value.

        An idle engine showing *mode* picks the new value up at once.
        A running interval keeps its target; the new value applies the
        next time *mode* is entered.
        """
        value = self._durations.set(mode, seconds)
        if not self.is_running and mode == self._mode:
            self._remaining = value
            self.remaining_changed.emit(self._remaining)
        self.durations_changed.emit(self._durations.as_dict())
        return value

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _complete(self, now: datetime) -> None:
        finished = self._mode
        key = date_key(now)

        if finished == Mode.FOCUS:
            self._history.increment(key)
        total = self._history.total()
        upcoming = next_mode_after(finished, total)

        self._mode = upcoming
        self._remaining = self._durations[upcoming]
        self._target = now + timedelta(seconds=self._remaining)

        event = CompletionEvent(
            finished_mode=finished,
            next_mode=upcoming,
            next_duration=self._remaining,
            completed_at=now,
            date_key=key,
            focus_count_today=self._history.get(key),
            total_focus_count=total,
        )
        log.info(
            "%s interval finished, %s begins (%d focus today)",
            finished.value, upcoming.value, event.focus_count_today,
        )

        self.session_completed.emit(event)
        if finished == Mode.FOCUS:
            self.history_changed.emit(self._history.as_dict())
        self._emit_state()
        self.remaining_changed.emit(self._remaining)

    def _emit_state(self) -> None:
        self.state_changed.emit(self.snapshot())
