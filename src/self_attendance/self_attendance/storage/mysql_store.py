from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT value
                FROM kv_store
                WHERE storage_key=%s
                """,
                (key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return str(r["value"])

    def save(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store (storage_key, value)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, value),
            )

    def keys(self, prefix: str = "") -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT storage_key
                FROM kv_store
                WHERE storage_key LIKE %s
                ORDER BY storage_key
                """,
                (prefix.replace("%", r"\%").replace("_", r"\_") + "%",),
            )
            return [str(r["storage_key"]) for r in fetchall(cur)]
