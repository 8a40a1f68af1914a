from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..common.datetime_utils import YearMonth, calendar_day
from ..core.constants import CHART_SERIES_NAME
from .model import AttendanceRecord


@dataclass(frozen=True)
class ChartSeries:
    name: str
    values: list[int]


@dataclass(frozen=True)
class ChartData:
    """Read-model for the bar chart renderer."""

    labels: list[str]
    series: list[ChartSeries]

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "series": [{"name": s.name, "values": list(s.values)} for s in self.series],
        }


def aggregate(month_records: Iterable[AttendanceRecord], year: int, month: int) -> list[int]:
    """Per-day record counts for one month; index ``i`` is day ``i + 1``.

    ``month_records`` is expected to be the output of ``filter_by_month``;
    only the day-of-month of each record is looked at.
    """
    days = YearMonth(year, month).days_in_month
    counts = [0] * days
    for record in month_records:
        day = calendar_day(record.date).day
        if day <= days:
            counts[day - 1] += 1
    return counts


def build_chart(month_records: Sequence[AttendanceRecord], year: int, month: int) -> ChartData:
    counts = aggregate(month_records, year, month)
    labels = [str(day) for day in range(1, len(counts) + 1)]
    return ChartData(labels=labels, series=[ChartSeries(name=CHART_SERIES_NAME, values=counts)])
