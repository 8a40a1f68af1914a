from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import YearMonth, format_date, format_long_date, now_local
from ..users.session import SessionContext
from .chart import ChartData, build_chart
from .export import export_csv
from .ledger import ToggleResult, apply_toggle, count_distinct_days, is_marked, is_selectable
from .model import AttendanceRecord
from .month_view import filter_by_month
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleOutcome:
    result: ToggleResult
    is_marked: bool


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model for the history panel."""

    history: list[dict]
    total_days_present: int
    month: str
    month_title: str
    month_records: list[dict]
    selected_date: str
    is_marked: bool
    is_selectable: bool


class AttendanceService:
    def __init__(self, store: AttendanceStore):
        self._store = store

    def toggle(self, context: SessionContext, day: date | datetime, *, now: datetime | None = None) -> ToggleOutcome:
        """Mark/unmark ``day`` for the session user and persist the full ledger."""

        identity = context.require_identity()
        now = now or now_local()

        ledger, result = apply_toggle(context.ledger, day, now)
        if result is ToggleResult.REJECTED_FUTURE:
            logger.info("Ignored future date %s for %s", format_date(day), identity.user_id)
            return ToggleOutcome(result=result, is_marked=False)

        context.ledger = ledger
        self._store.save(identity.user_id, ledger)
        logger.info("%s %s for %s", result.value.capitalize(), format_date(day), identity.user_id)
        return ToggleOutcome(result=result, is_marked=result is ToggleResult.MARKED)

    def is_marked(self, context: SessionContext, day: date | datetime) -> bool:
        context.require_identity()
        return is_marked(context.ledger, day)

    def month_records(self, context: SessionContext, year_month: YearMonth) -> list[AttendanceRecord]:
        context.require_identity()
        return filter_by_month(context.ledger, year_month)

    def total_days_present(self, context: SessionContext) -> int:
        context.require_identity()
        return count_distinct_days(context.ledger)

    def chart(self, context: SessionContext, year_month: YearMonth) -> ChartData:
        records = self.month_records(context, year_month)
        return build_chart(records, year_month.year, year_month.month)

    def export_csv(self, context: SessionContext) -> str:
        context.require_identity()
        return export_csv(context.ledger)

    def summary(
        self,
        context: SessionContext,
        *,
        year_month: Optional[YearMonth] = None,
        selected: Optional[date] = None,
        now: datetime | None = None,
    ) -> AttendanceSummary:
        now = now or now_local()
        selected = selected or now.date()
        # The visible month follows the selected date unless given explicitly.
        year_month = year_month or YearMonth.of(selected)

        return AttendanceSummary(
            history=[self._to_ui(r) for r in context.ledger],
            total_days_present=self.total_days_present(context),
            month=str(year_month),
            month_title=year_month.title,
            month_records=[self._to_ui(r) for r in self.month_records(context, year_month)],
            selected_date=format_date(selected),
            is_marked=self.is_marked(context, selected),
            is_selectable=is_selectable(selected, now),
        )

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": format_date(r.date),
            "label": format_long_date(r.date),
            "time": r.time,
        }
