from __future__ import annotations

from typing import Iterable, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .base import KeyValueStore
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone


class MySQLKeyValueStore(KeyValueStore):
    """Key-value rows in the ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT storage_value FROM kv_store WHERE storage_key=%s", (key,))
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"cannot read {key!r}: {e}") from e
        if not row:
            return None
        return row["storage_value"]

    def set(self, key: str, value: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO kv_store(storage_key, storage_value)
                    VALUES(%s,%s)
                    ON DUPLICATE KEY UPDATE storage_value=VALUES(storage_value)
                    """,
                    (key, value),
                )
        except mysql.connector.Error as e:
            raise StorageError(f"cannot write {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM kv_store WHERE storage_key=%s", (key,))
        except mysql.connector.Error as e:
            raise StorageError(f"cannot remove {key!r}: {e}") from e

    def clear(self) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM kv_store")
        except mysql.connector.Error as e:
            raise StorageError(f"cannot clear store: {e}") from e

    def keys(self) -> Iterable[str]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT storage_key FROM kv_store ORDER BY storage_key")
                return [r["storage_key"] for r in fetchall(cur)]
        except mysql.connector.Error as e:
            raise StorageError(f"cannot list keys: {e}") from e
