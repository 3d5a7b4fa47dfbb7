from __future__ import annotations

import pytest

from src.attendance_journal.attendance_journal.container import build_container
from src.attendance_journal.attendance_journal.storage.memory_store import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def container(store):
    """Empty journal (no demo data) over an in-memory store."""
    return build_container(storage_config={"backend": "memory"}, store=store, seed_demo_data=False)


@pytest.fixture
def demo_container(store):
    return build_container(storage_config={"backend": "memory"}, store=store, seed_demo_data=True)
