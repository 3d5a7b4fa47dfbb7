"""Write demo accounts, roster and one session into the configured store.

Existing collections are left untouched unless ``--reset`` is given.
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_journal.attendance_journal.container import build_container
from src.attendance_journal.attendance_journal.core.constants import STORAGE_KEYS
from src.attendance_journal.attendance_journal.storage.factory import build_store


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop every journal key before seeding")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    storage_config = {
        "backend": settings.STORAGE_BACKEND,
        "path": settings.STORAGE_PATH,
        "db": dict(settings.DB_CONFIG),
    }
    store = build_store(storage_config)
    if args.reset:
        for key in STORAGE_KEYS:
            store.remove(key)

    container = build_container(storage_config=storage_config, store=store, seed_demo_data=True)
    overview = container.attendance_service.overview()
    print(
        f"OK: Seeded {storage_config['backend']} store -> "
        f"users={len(container.users_repo.list_all())} students={overview.students} sessions={overview.sessions}"
    )


if __name__ == "__main__":
    main()
