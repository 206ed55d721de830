"""Tests for the day-keyed history ledger."""

from datetime import date, datetime, timezone

import pytest

from pomodesk.history.ledger import DayCount, HistoryLedger, date_key


class TestDateKey:
    def test_pads_month_and_day(self):
        assert date_key(date(2026, 1, 5)) == "2026-01-05"

    def test_datetime_uses_its_own_date(self):
        moment = datetime(2026, 12, 31, 23, 59, tzinfo=timezone.utc)
        assert date_key(moment) == "2026-12-31"


class TestLedgerBasics:
    def test_get_absent_is_zero(self):
        assert HistoryLedger().get("2026-03-10") == 0

    def test_increment_creates_then_adds(self):
        ledger = HistoryLedger()
        assert ledger.increment("2026-03-10") == 1
        assert ledger.increment("2026-03-10") == 2
        assert ledger.get("2026-03-10") == 2

    def test_increment_touches_one_key(self):
        ledger = HistoryLedger({"2026-03-09": 4})
        ledger.increment("2026-03-10")
        assert ledger.as_dict() == {"2026-03-09": 4, "2026-03-10": 1}

    def test_total_is_derived(self):
        ledger = HistoryLedger({"2026-03-08": 2, "2026-03-09": 3})
        assert ledger.total() == 5
        ledger.increment("2026-03-10")
        assert ledger.total() == 6

    def test_as_dict_is_a_copy(self):
        ledger = HistoryLedger({"2026-03-09": 1})
        ledger.as_dict()["2026-03-09"] = 100
        assert ledger.get("2026-03-09") == 1

    def test_contains_and_len(self):
        ledger = HistoryLedger({"2026-03-09": 1})
        assert "2026-03-09" in ledger
        assert "2026-03-10" not in ledger
        assert len(ledger) == 1


class TestLastNDays:
    def test_most_recent_first_zero_filled(self):
        ledger = HistoryLedger({"2026-03-10": 3, "2026-03-08": 1})
        days = ledger.last_n_days(3, date(2026, 3, 10))
        assert days == [
            DayCount("2026-03-10", 3),
            DayCount("2026-03-09", 0),
            DayCount("2026-03-08", 1),
        ]

    def test_crosses_month_boundary(self):
        days = HistoryLedger().last_n_days(3, date(2026, 3, 1))
        assert [d.key for d in days] == ["2026-03-01", "2026-02-28", "2026-02-27"]

    def test_accepts_datetime_reference(self):
        moment = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)
        assert HistoryLedger().last_n_days(1, moment)[0].key == "2026-03-10"

    def test_zero_days(self):
        assert HistoryLedger().last_n_days(0, date(2026, 3, 10)) == []

    def test_ignores_days_outside_window(self):
        ledger = HistoryLedger({"2026-02-01": 9})
        days = ledger.last_n_days(7, date(2026, 3, 10))
        assert sum(d.count for d in days) == 0


class TestSummary:
    def test_today_yesterday_week(self):
        ledger = HistoryLedger({
            "2026-03-10": 4,
            "2026-03-09": 2,
            "2026-03-04": 1,
            "2026-03-03": 8,  # eight days back, outside the week
        })
        summary = ledger.summary(date(2026, 3, 10))
        assert summary.today == 4
        assert summary.yesterday == 2
        assert summary.week_total == 7
        assert len(summary.days) == 7


class TestFromBlob:
    def test_valid_blob(self):
        ledger = HistoryLedger.from_blob({"2026-03-10": 2})
        assert ledger.get("2026-03-10") == 2

    @pytest.mark.parametrize("blob", [None, [], "text", 3])
    def test_non_dict_is_empty(self, blob):
        assert HistoryLedger.from_blob(blob).as_dict() == {}

    def test_malformed_entries_dropped(self):
        ledger = HistoryLedger.from_blob({
            "2026-03-10": 2,
            "yesterday": 1,
            "2026-02-30": 1,
            "2026-03-09": -1,
            "2026-03-08": "3",
            "2026-03-07": True,
            "2026-03-06": 1.5,
        })
        assert ledger.as_dict() == {"2026-03-10": 2}
