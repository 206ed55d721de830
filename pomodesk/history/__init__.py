"""History package."""

from .ledger import HistoryLedger, HistorySummary, DayCount, date_key

__all__ = ["HistoryLedger", "HistorySummary", "DayCount", "date_key"]
