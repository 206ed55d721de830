"""Shared test helpers for Pomodesk."""

from datetime import datetime, timedelta, timezone


class FakeClock:
    """Manually advanced clock; starts at 2026-03-10 09:00 UTC."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2026, 3, 10, 9, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0, *, ms: int = 0) -> None:
        self._now += timedelta(seconds=seconds, milliseconds=ms)

    def set(self, moment: datetime) -> None:
        self._now = moment


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_out(engine, clock) -> None:
    """Jump the clock to the end of the running interval and tick."""
    clock.advance(engine.remaining)
    engine.tick()
