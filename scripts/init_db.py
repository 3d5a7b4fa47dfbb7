"""Create the journal database and its ``kv_store`` table.

With ``--check`` nothing is created; the script only lists existing tables.
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_journal.attendance_journal.storage.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--check", action="store_true", help="only list the tables of the configured database")
    parser.add_argument("--schema", type=Path, default=REPO_ROOT / "database" / "schema.sql")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    if not args.check:
        apply_schema(db_config, schema_path=args.schema)

    tables = list_tables(db_config)
    logger.info("%s: %s", db_config.get("database"), ", ".join(tables) or "(no tables)")
    return 0 if "kv_store" in tables else 1


if __name__ == "__main__":
    sys.exit(main())
