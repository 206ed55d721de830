"""Day-keyed counts of completed focus intervals."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Mapping, NamedTuple

log = logging.getLogger(__name__)

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEK_DAYS = 7


def date_key(moment: date | datetime) -> str:
    """``YYYY-MM-DD`` for *moment* in its own (local) calendar."""
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def _is_date_key(key: object) -> bool:
    if not isinstance(key, str) or not _DATE_KEY_RE.match(key):
        return False
    try:
        date.fromisoformat(key)
    except ValueError:
        return False
    return True


class DayCount(NamedTuple):
    key: str
    count: int


@dataclass(frozen=True)
class HistorySummary:
    today: int
    yesterday: int
    week_total: int
    days: tuple[DayCount, ...]


class HistoryLedger:
    """Completed focus intervals per local calendar day.

    Counts only grow, one at a time, through ``increment``.  Totals are
    derived on demand and never stored.
    """

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts: dict[str, int] = dict(counts) if counts else {}

    def increment(self, key: str) -> int:
        self._counts[key] = self._counts.get(key, 0) + 1
        return self._counts[key]

    def get(self, key: str) -> int:
        return self._counts.get(key, 0)

    def total(self) -> int:
        return sum(self._counts.values())

    def last_n_days(self, n: int, reference: date | datetime) -> list[DayCount]:
        """The *n* days ending at *reference*, most recent first."""
        if isinstance(reference, datetime):
            reference = reference.date()
        days = []
        for offset in range(max(0, n)):
            key = date_key(reference - timedelta(days=offset))
            days.append(DayCount(key, self.get(key)))
        return days

    def summary(self, reference: date | datetime) -> HistorySummary:
        days = self.last_n_days(WEEK_DAYS, reference)
        return HistorySummary(
            today=days[0].count,
            yesterday=days[1].count,
            week_total=sum(d.count for d in days),
            days=tuple(days),
        )

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def copy(self) -> HistoryLedger:
        return HistoryLedger(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __repr__(self) -> str:
        return f"<HistoryLedger days={len(self._counts)} total={self.total()}>"

    @classmethod
    def from_blob(cls, data: object) -> HistoryLedger:
        """Build a ledger from a decoded blob, dropping malformed entries."""
        if not isinstance(data, dict):
            return cls()
        counts: dict[str, int] = {}
        dropped = 0
        for key, value in data.items():
            if (
                _is_date_key(key)
                and isinstance(value, int)
                and not isinstance(value, bool)
                and value >= 0
            ):
                counts[key] = value
            else:
                dropped += 1
        if dropped:
            log.warning("Dropped %d malformed history entries", dropped)
        return cls(counts)
