from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import mysql.connector

from .connection import DBConfig, config_from_dict

logger = logging.getLogger(__name__)

_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> List[str]:
    """Split schema.sql into statements for the configured database.

    ``--`` comment lines are dropped, and so are the file's own
    ``CREATE DATABASE`` / ``USE`` lines. The schema holds no string literals,
    so a plain split on ``;`` is enough.
    """
    body = "\n".join(ln for ln in sql.splitlines() if not ln.lstrip().startswith("--"))
    statements = (stmt.strip() for stmt in body.split(";"))
    return [stmt for stmt in statements if stmt and not _SKIPPED.match(stmt)]


def _connect(target: DBConfig, *, with_database: bool = True):
    params = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        params["database"] = target.database
    return mysql.connector.connect(**params)


def ensure_database_exists(db_config: dict) -> None:
    target = config_from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = config_from_dict(db_config)
    ensure_database_exists(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("applied %d schema statements to %s/%s", len(statements), target.host, target.database)


def list_tables(db_config: dict) -> List[str]:
    conn = _connect(config_from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
