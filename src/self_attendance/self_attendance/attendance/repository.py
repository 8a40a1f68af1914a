from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_non_empty
from ..core.constants import STORAGE_KEY_PREFIX, TIME_FORMAT
from ..storage.repository import KeyValueStore
from .model import AttendanceRecord, Ledger

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"\d{2}:\d{2}:\d{2}")


def storage_key(user_id: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{require_non_empty(user_id, 'User id')}"


def record_to_dict(record: AttendanceRecord) -> dict:
    return {"date": record.date.isoformat(), "time": record.time}


def record_from_dict(data: Any) -> AttendanceRecord:
    """Raises ValueError/TypeError/KeyError on malformed entries."""
    when = parse_iso_datetime(data["date"])
    time_s = str(data["time"])
    if not _TIME_PATTERN.fullmatch(time_s):
        raise ValueError(f"time is not HH:MM:SS: {time_s!r}")
    datetime.strptime(time_s, TIME_FORMAT)
    return AttendanceRecord(date=when, time=time_s)


def decode_ledger(raw: Optional[str], *, key: str = "") -> Ledger:
    """Decode a stored JSON array; malformed entries are skipped."""

    if not raw:
        return Ledger.empty()

    try:
        items = json.loads(raw)
    except ValueError as e:
        logger.warning("Unreadable ledger under %s, starting empty: %s", key, e)
        return Ledger.empty()

    if not isinstance(items, list):
        logger.warning("Ledger under %s is not a list, starting empty", key)
        return Ledger.empty()

    records = []
    for i, item in enumerate(items):
        try:
            records.append(record_from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Skipping malformed record #%d under %s: %r (%s)", i, key, item, e)
    return Ledger(tuple(records))


def encode_ledger(ledger: Ledger) -> str:
    return json.dumps([record_to_dict(r) for r in ledger])


class AttendanceStore:
    """Per-user durable persistence of ledgers on top of a KeyValueStore."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def load(self, user_id: str) -> Ledger:
        key = storage_key(user_id)
        try:
            raw = self._kv.load(key)
        except Exception:
            logger.warning("Storage read failed for %s, starting empty", key, exc_info=True)
            return Ledger.empty()
        return decode_ledger(raw, key=key)

    def save(self, user_id: str, ledger: Ledger) -> None:
        """Overwrite the whole stored ledger of ``user_id``."""
        self._kv.save(storage_key(user_id), encode_ledger(ledger))

    def user_ids(self) -> list[str]:
        return [k[len(STORAGE_KEY_PREFIX):] for k in self._kv.keys(STORAGE_KEY_PREFIX)]
