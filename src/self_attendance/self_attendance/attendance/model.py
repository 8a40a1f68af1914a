from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one marked day.

    ``date`` keeps full timestamp precision but only its calendar day takes
    part in comparisons. ``time`` is the local ``HH:MM:SS`` of the marking.
    """

    date: datetime
    time: str


@dataclass(frozen=True)
class Ledger:
    """Ordered attendance records of a single user, newest-marked first."""

    records: tuple[AttendanceRecord, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "Ledger":
        return cls(())

    def __iter__(self) -> Iterator[AttendanceRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)
