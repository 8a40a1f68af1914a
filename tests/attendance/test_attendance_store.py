from __future__ import annotations

import json
from datetime import date, datetime, timezone

from src.self_attendance.self_attendance.attendance.ledger import toggle
from src.self_attendance.self_attendance.attendance.model import Ledger
from src.self_attendance.self_attendance.attendance.repository import AttendanceStore, storage_key
from src.self_attendance.self_attendance.storage.memory_store import InMemoryKeyValueStore


class BrokenKeyValueStore:
    def load(self, key):
        raise OSError("disk gone")

    def save(self, key, value):
        raise OSError("disk gone")

    def keys(self, prefix=""):
        return []


def test_storage_key_is_prefixed_user_id():
    assert storage_key("12345") == "attendanceData_12345"


def test_load_missing_user_returns_empty_ledger():
    store = AttendanceStore(InMemoryKeyValueStore())

    assert store.load("nobody") == Ledger.empty()


def test_save_then_load(fixed_now):
    kv = InMemoryKeyValueStore()
    store = AttendanceStore(kv)
    ledger = toggle(toggle(Ledger.empty(), date(2024, 3, 5), fixed_now), date(2024, 3, 9), fixed_now)

    store.save("u1", ledger)

    assert store.load("u1") == ledger
    stored = json.loads(kv.load("attendanceData_u1"))
    assert stored == [
        {"date": "2024-03-09T00:00:00", "time": "09:00:00"},
        {"date": "2024-03-05T00:00:00", "time": "09:00:00"},
    ]


def test_users_are_isolated(fixed_now):
    store = AttendanceStore(InMemoryKeyValueStore())
    store.save("alice", toggle(Ledger.empty(), date(2024, 3, 5), fixed_now))

    store.save("bob", toggle(Ledger.empty(), date(2024, 3, 6), fixed_now))

    alice = store.load("alice")
    assert [r.date.date() for r in alice] == [date(2024, 3, 5)]
    assert store.user_ids() == ["alice", "bob"]


def test_unreadable_json_falls_back_to_empty():
    kv = InMemoryKeyValueStore({"attendanceData_u1": "{not json"})

    assert AttendanceStore(kv).load("u1") == Ledger.empty()


def test_non_list_document_falls_back_to_empty():
    kv = InMemoryKeyValueStore({"attendanceData_u1": json.dumps({"date": "2024-03-05"})})

    assert AttendanceStore(kv).load("u1") == Ledger.empty()


def test_malformed_records_are_skipped():
    raw = json.dumps(
        [
            {"date": "2024-03-05T00:00:00", "time": "08:00:00"},
            {"date": "not-a-date", "time": "08:00:00"},
            {"time": "08:00:00"},
            {"date": "2024-03-06T00:00:00", "time": "8 o'clock"},
            {"date": "2024-03-08T00:00:00", "time": "9:5:3"},
            {"date": "2024-03-09T00:00:00", "time": "25:00:00"},
            "garbage",
            {"date": "2024-03-07T00:00:00", "time": "10:00:00"},
        ]
    )
    kv = InMemoryKeyValueStore({"attendanceData_u1": raw})

    ledger = AttendanceStore(kv).load("u1")

    assert [r.date.date() for r in ledger] == [date(2024, 3, 5), date(2024, 3, 7)]


def test_browser_iso_strings_are_read_in_local_time():
    kv = InMemoryKeyValueStore(
        {"attendanceData_u1": json.dumps([{"date": "2024-03-05T12:00:00.000Z", "time": "12:00:00"}])}
    )

    ledger = AttendanceStore(kv).load("u1")

    expected = datetime(2024, 3, 5, 12, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert ledger.records[0].date == expected


def test_read_failure_falls_back_to_empty():
    assert AttendanceStore(BrokenKeyValueStore()).load("u1") == Ledger.empty()
