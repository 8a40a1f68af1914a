"""Toggle and lookup operations on a :class:`Ledger`.

All functions are pure: they never mutate their input and return a new
ledger when something changes.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..common.datetime_utils import format_date, format_time, is_after_day, same_day, to_local
from ..core.exceptions import LedgerIntegrityError
from .model import AttendanceRecord, Ledger


class ToggleResult(str, Enum):
    MARKED = "marked"
    UNMARKED = "unmarked"
    REJECTED_FUTURE = "rejected_future"


def find_index(ledger: Ledger, day: date | datetime) -> Optional[int]:
    for i, record in enumerate(ledger):
        if same_day(record.date, day):
            return i
    return None


def is_marked(ledger: Ledger, day: date | datetime) -> bool:
    return find_index(ledger, day) is not None


def is_selectable(day: date | datetime, now: datetime) -> bool:
    """Future days cannot be marked."""
    return not is_after_day(day, now)


def apply_toggle(ledger: Ledger, day: date | datetime, now: datetime) -> tuple[Ledger, ToggleResult]:
    if not is_selectable(day, now):
        return ledger, ToggleResult.REJECTED_FUTURE

    idx = find_index(ledger, day)
    if idx is not None:
        records = ledger.records[:idx] + ledger.records[idx + 1 :]
        return Ledger(records), ToggleResult.UNMARKED

    if isinstance(day, datetime):
        day = to_local(day)
    else:
        day = datetime.combine(day, datetime.min.time())
    record = AttendanceRecord(date=day, time=format_time(now))
    return Ledger((record,) + ledger.records), ToggleResult.MARKED


def toggle(ledger: Ledger, day: date | datetime, now: datetime) -> Ledger:
    """Mark ``day`` if unmarked, unmark it otherwise; future days are ignored."""
    new_ledger, _ = apply_toggle(ledger, day, now)
    return new_ledger


def count_distinct_days(ledger: Ledger) -> int:
    days = {format_date(r.date) for r in ledger}
    if len(days) != len(ledger):
        raise LedgerIntegrityError(
            f"Ledger holds {len(ledger)} records for {len(days)} distinct days"
        )
    return len(days)
