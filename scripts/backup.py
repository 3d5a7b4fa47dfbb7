"""Backup the journal store.

Note: Dumps every storage key of the configured backend into one JSON file
under ``backups/``; the file can be fed back with ``--restore``.
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_journal.attendance_journal.core.exceptions import StorageError
from src.attendance_journal.attendance_journal.storage.factory import build_store


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--restore", type=Path, help="backup file to load into the store")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    store = build_store(
        {"backend": settings.STORAGE_BACKEND, "path": settings.STORAGE_PATH, "db": dict(settings.DB_CONFIG)}
    )

    try:
        if args.restore:
            data = json.loads(args.restore.read_text(encoding="utf-8"))
            for key, value in data.items():
                store.set(key, value)
            print(f"OK: Restored {len(data)} keys from {args.restore}")
            return

        data = {key: store.get(key) for key in store.keys()}
    except StorageError as e:
        raise SystemExit(f"Storage error: {e}")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"journal_{ts}.json"
    out_file.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
