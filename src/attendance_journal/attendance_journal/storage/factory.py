from __future__ import annotations

from pathlib import Path

from ..core.exceptions import ValidationError
from .base import KeyValueStore
from .connection import DatabaseConnection, config_from_dict
from .json_file_store import JsonFileStore
from .memory_store import MemoryStore
from .mysql_store import MySQLKeyValueStore


def build_store(storage_config: dict) -> KeyValueStore:
    """Pick a backend from settings: ``file`` (default), ``mysql`` or ``memory``."""

    backend = str(storage_config.get("backend", "file")).lower()

    if backend == "memory":
        return MemoryStore(quota_bytes=storage_config.get("quota_bytes"))

    if backend == "file":
        return JsonFileStore(Path(storage_config.get("path") or "instance/journal.json"))

    if backend == "mysql":
        conn = DatabaseConnection.get_instance(config_from_dict(storage_config.get("db", {})))
        return MySQLKeyValueStore(conn)

    raise ValidationError(f"Unknown storage backend: {backend}")
