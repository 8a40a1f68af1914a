from __future__ import annotations

from ..common.datetime_utils import YearMonth
from .model import AttendanceRecord, Ledger


def filter_by_month(ledger: Ledger, year_month: YearMonth) -> list[AttendanceRecord]:
    """Records whose (year, month) equals ``year_month``, in ledger order."""
    return [r for r in ledger if YearMonth.of(r.date) == year_month]
