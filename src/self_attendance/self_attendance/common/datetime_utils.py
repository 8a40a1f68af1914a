from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime

from ..core.constants import DATE_FORMAT, TIME_FORMAT, YEAR_MONTH_FORMAT
from ..core.exceptions import ValidationError


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_local(value: datetime) -> datetime:
    """Drop tz info after converting aware timestamps to the local zone."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def calendar_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def same_day(a: date | datetime, b: date | datetime) -> bool:
    """Calendar-day equality: (year, month, day) in local time."""
    da, db = calendar_day(a), calendar_day(b)
    return (da.year, da.month, da.day) == (db.year, db.month, db.day)


def is_after_day(value: date | datetime, now: date | datetime) -> bool:
    return calendar_day(value) > calendar_day(now)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Accepts the trailing ``Z`` that browser ``toISOString`` produces.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local(datetime.fromisoformat(text))


def format_date(value: date | datetime) -> str:
    d = calendar_day(value)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def format_long_date(value: date | datetime) -> str:
    d = calendar_day(value)
    return f"{d:%B} {d.day}, {d.year}"


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Invalid month: {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValidationError(f"Invalid year: {self.year}")

    @classmethod
    def of(cls, value: date | datetime) -> "YearMonth":
        d = calendar_day(value)
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse YYYY-MM string into a year-month."""
        try:
            parsed = datetime.strptime(value.strip(), YEAR_MONTH_FORMAT)
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid month: {value!r}") from None
        return cls(parsed.year, parsed.month)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
