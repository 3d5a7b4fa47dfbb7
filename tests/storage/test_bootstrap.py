from __future__ import annotations

from pathlib import Path

from src.attendance_journal.attendance_journal.storage.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_shipped_schema_yields_only_the_kv_table():
    statements = schema_statements(SCHEMA.read_text(encoding="utf-8"))

    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS kv_store")


def test_comments_database_and_use_lines_are_dropped():
    sql = "-- header; note\nCREATE DATABASE IF NOT EXISTS foo;\nuse foo;\nCREATE TABLE t (id INT);\n\n"

    assert schema_statements(sql) == ["CREATE TABLE t (id INT)"]
