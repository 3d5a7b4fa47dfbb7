from __future__ import annotations

import json

import mysql.connector
import pytest

from src.attendance_journal.attendance_journal.core.exceptions import StorageError
from src.attendance_journal.attendance_journal.storage.factory import build_store
from src.attendance_journal.attendance_journal.storage.json_file_store import JsonFileStore
from src.attendance_journal.attendance_journal.storage.memory_store import MemoryStore
from src.attendance_journal.attendance_journal.storage.mysql_store import MySQLKeyValueStore


def test_json_file_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "journal.json"
    store = JsonFileStore(path)

    assert store.get("a") is None
    store.set("a", "[1]")
    store.set("b", '{"x": 2}')
    store.remove("b")

    again = JsonFileStore(path)
    assert again.get("a") == "[1]"
    assert list(again.keys()) == ["a"]
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "[1]"}


def test_json_file_store_rejects_garbage_file(tmp_path):
    path = tmp_path / "journal.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStore(path).get("a")


def test_memory_store_quota():
    store = MemoryStore(quota_bytes=10)
    store.set("a", "12345")
    store.set("a", "1234567890")

    with pytest.raises(StorageError):
        store.set("b", "x")


def test_build_store_picks_backend(tmp_path):
    assert isinstance(build_store({"backend": "memory"}), MemoryStore)
    file_store = build_store({"backend": "file", "path": str(tmp_path / "j.json")})
    assert isinstance(file_store, JsonFileStore)
    assert file_store.path == tmp_path / "j.json"


class FakeCursor:
    def __init__(self, db, *, fail=False):
        self._db = db
        self._fail = fail
        self._result = []
        self.closed = False

    def execute(self, sql, params=()):
        if self._fail:
            raise mysql.connector.Error("connection lost")
        sql = " ".join(sql.split())
        if sql.startswith("SELECT storage_value"):
            value = self._db.get(params[0])
            self._result = [{"storage_value": value}] if value is not None else []
        elif sql.startswith("SELECT storage_key"):
            self._result = [{"storage_key": k} for k in sorted(self._db)]
        elif sql.startswith("INSERT INTO kv_store"):
            self._db[params[0]] = params[1]
        elif sql.startswith("DELETE FROM kv_store WHERE"):
            self._db.pop(params[0], None)
        elif sql.startswith("DELETE FROM kv_store"):
            self._db.clear()

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return self._result

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, db, *, fail=False):
        self._db = db
        self._fail = fail
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self._db, fail=self._fail)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, *, fail=False):
        self.db = {}
        self.fail = fail
        self.connections = []

    def connect(self):
        conn = FakeConnection(self.db, fail=self.fail)
        self.connections.append(conn)
        return conn


def test_mysql_store_upserts_and_reads_back():
    factory = FakeConnFactory()
    store = MySQLKeyValueStore(factory)

    store.set("journal.users", "[]")
    store.set("journal.users", "[1]")

    assert store.get("journal.users") == "[1]"
    assert store.get("missing") is None
    assert list(store.keys()) == ["journal.users"]
    assert all(c.committed and c.closed for c in factory.connections)

    store.clear()
    assert store.get("journal.users") is None


def test_mysql_store_wraps_driver_errors_and_rolls_back():
    factory = FakeConnFactory(fail=True)
    store = MySQLKeyValueStore(factory)

    with pytest.raises(StorageError):
        store.set("k", "v")

    conn = factory.connections[-1]
    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed
