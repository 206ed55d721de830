"""Side effects hung off the timer engine's signals.

Sound, notification and wake-lock are all optional and all
best-effort: any of them may be ``None``, and any exception they raise
is logged and dropped.  The engine never sees them.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject

from ..audio.sounds import SoundManager
from ..timer.durations import Mode
from ..timer.engine import CompletionEvent, TimerEngine, TimerSnapshot
from .notifications import Notifier
from .wake_lock import WakeLock

log = logging.getLogger(__name__)

COMPLETION_SOUNDS: dict[Mode, str] = {
    Mode.FOCUS: "focus_complete",
    Mode.SHORT_BREAK: "break_complete",
    Mode.LONG_BREAK: "break_complete",
}


class SideEffectDispatcher(QObject):
    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        sound: SoundManager | None = None,
        notifier: Notifier | None = None,
        wake_lock: WakeLock | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._sound = sound
        self._notifier = notifier
        self._wake_lock = wake_lock
        self._running = engine.is_running
        self._foreground = True
        self.wake_lock_enabled = True

        engine.session_completed.connect(self._on_session_completed)
        engine.state_changed.connect(self._on_state_changed)

    # ── public API ────────────────────────────────────────────────────

    @property
    def foreground(self) -> bool:
        return self._foreground

    def set_foreground(self, foreground: bool) -> None:
        """Window shown/activated (True) or hidden/minimized (False)."""
        if foreground == self._foreground:
            return
        self._foreground = foreground
        self._sync_wake_lock()

    def set_wake_lock_enabled(self, enabled: bool) -> None:
        self.wake_lock_enabled = enabled
        self._sync_wake_lock()

    def shutdown(self) -> None:
        """Drop the wake lock; called on quit."""
        if self._wake_lock is not None:
            self._attempt("wake lock release", self._wake_lock.release)

    # ── signal handlers ───────────────────────────────────────────────

    def _on_session_completed(self, event: CompletionEvent) -> None:
        if self._sound is not None:
            self._attempt("sound", self._sound.play, COMPLETION_SOUNDS[event.finished_mode])
        if self._notifier is not None:
            self._attempt("notification", self._notifier.notify, event)

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        self._running = snapshot.is_running
        self._sync_wake_lock()

    # ── internal ──────────────────────────────────────────────────────

    def _sync_wake_lock(self) -> None:
        if self._wake_lock is None:
            return
        wanted = self._running and self._foreground and self.wake_lock_enabled
        if wanted and not self._wake_lock.held:
            self._attempt("wake lock acquire", self._wake_lock.acquire)
        elif not wanted and self._wake_lock.held:
            self._attempt("wake lock release", self._wake_lock.release)

    @staticmethod
    def _attempt(label: str, fn: Callable, *args) -> None:
        try:
            fn(*args)
        except Exception as exc:
            log.debug("%s failed: %s", label, exc)
