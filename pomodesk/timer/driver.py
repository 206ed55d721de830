"""Qt scheduler that feeds ``TimerEngine.tick``."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer

from .engine import TimerEngine, TimerSnapshot

DEFAULT_TICK_MS = 250
MIN_TICK_MS = 100
MAX_TICK_MS = 1000


class TickDriver(QObject):
    """Runs a ``QTimer`` only while the engine is running.

    The interval only bounds display lag; a late or skipped timeout
    costs no accuracy because the engine re-reads the clock.
    """

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        interval_ms: int = DEFAULT_TICK_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(MIN_TICK_MS, min(interval_ms, MAX_TICK_MS)))
        self._qt_timer.timeout.connect(engine.tick)
        engine.state_changed.connect(self._on_state_changed)
        self._on_state_changed(engine.snapshot())

    @property
    def active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        if snapshot.is_running and not self._qt_timer.isActive():
            self._qt_timer.start()
        elif not snapshot.is_running:
            self._qt_timer.stop()
