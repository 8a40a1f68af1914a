from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .storage.json_file_store import JsonFileKeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.mysql_store import MySQLKeyValueStore
from .storage.repository import KeyValueStore
from .users.service import AuthService
from .users.session import SessionService


@dataclass(frozen=True)
class Container:
    kv_store: KeyValueStore
    attendance_store: AttendanceStore

    auth_service: AuthService
    session_service: SessionService
    attendance_service: AttendanceService


def build_kv_store(*, backend: str, data_dir: str | Path | None = None, db_config: dict | None = None) -> KeyValueStore:
    backend = (backend or "json").lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json":
        return JsonFileKeyValueStore(data_dir or "data")
    if backend == "mysql":
        if not db_config:
            raise ValueError("mysql backend requires DB_CONFIG")
        return MySQLKeyValueStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(*, kv_store: KeyValueStore) -> Container:
    attendance_store = AttendanceStore(kv_store)

    return Container(
        kv_store=kv_store,
        attendance_store=attendance_store,
        auth_service=AuthService(),
        session_service=SessionService(attendance_store),
        attendance_service=AttendanceService(attendance_store),
    )
