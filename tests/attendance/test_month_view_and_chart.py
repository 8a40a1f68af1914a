from __future__ import annotations

from datetime import date, datetime

import pytest

from src.self_attendance.self_attendance.attendance.chart import aggregate, build_chart
from src.self_attendance.self_attendance.attendance.ledger import toggle
from src.self_attendance.self_attendance.attendance.model import AttendanceRecord, Ledger
from src.self_attendance.self_attendance.attendance.month_view import filter_by_month
from src.self_attendance.self_attendance.common.datetime_utils import YearMonth
from src.self_attendance.self_attendance.core.exceptions import ValidationError


@pytest.fixture
def ledger() -> Ledger:
    return Ledger(
        (
            AttendanceRecord(date=datetime(2024, 4, 1), time="08:00:00"),
            AttendanceRecord(date=datetime(2024, 3, 20), time="09:15:00"),
            AttendanceRecord(date=datetime(2024, 3, 5), time="10:30:00"),
        )
    )


def test_filter_by_month_keeps_only_that_month(ledger):
    march = filter_by_month(ledger, YearMonth(2024, 3))

    assert [r.date.day for r in march] == [20, 5]
    assert filter_by_month(ledger, YearMonth(2024, 5)) == []
    assert filter_by_month(ledger, YearMonth(2023, 3)) == []


def test_aggregate_march(ledger):
    counts = aggregate(filter_by_month(ledger, YearMonth(2024, 3)), 2024, 3)

    assert len(counts) == 31
    assert counts[4] == 1
    assert counts[19] == 1
    assert sum(counts) == 2


@pytest.mark.parametrize(
    "year, month, days",
    [(2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 4, 30), (2024, 12, 31)],
)
def test_aggregate_length_follows_gregorian_calendar(year, month, days):
    assert len(aggregate([], year, month)) == days


def test_aggregate_sums_duplicates():
    records = [
        AttendanceRecord(date=datetime(2024, 3, 5, 8), time="08:00:00"),
        AttendanceRecord(date=datetime(2024, 3, 5, 17), time="17:00:00"),
    ]

    assert aggregate(records, 2024, 3)[4] == 2


def test_sum_law_for_every_month(ledger):
    for ym in (YearMonth(2024, 3), YearMonth(2024, 4), YearMonth(2024, 5)):
        month_records = filter_by_month(ledger, ym)
        assert sum(aggregate(month_records, ym.year, ym.month)) == len(month_records)


def test_build_chart_payload(ledger):
    chart = build_chart(filter_by_month(ledger, YearMonth(2024, 4)), 2024, 4).to_dict()

    assert chart["labels"] == [str(d) for d in range(1, 31)]
    assert chart["series"][0]["name"] == "Attendance Days"
    assert chart["series"][0]["values"][0] == 1
    assert sum(chart["series"][0]["values"]) == 1


def test_year_month_parse_and_format():
    ym = YearMonth.parse("2024-03")

    assert (ym.year, ym.month) == (2024, 3)
    assert str(ym) == "2024-03"
    assert ym.title == "March 2024"


@pytest.mark.parametrize("value", ["2024-13", "March", "", "2024/03"])
def test_year_month_parse_rejects_garbage(value):
    with pytest.raises(ValidationError):
        YearMonth.parse(value)


def test_early_years_land_in_their_month():
    ledger = toggle(Ledger.empty(), date(999, 3, 5), datetime(2024, 3, 10, 9))

    march = filter_by_month(ledger, YearMonth(999, 3))

    assert len(march) == 1
    assert aggregate(march, 999, 3)[4] == 1
    assert str(YearMonth.of(march[0].date)) == "0999-03"
