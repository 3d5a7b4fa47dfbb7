from __future__ import annotations

from typing import Dict, Iterable, Optional

from ..core.exceptions import StorageError
from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dict-backed store.

    ``quota_bytes`` caps the total size of stored values, which lets tests
    reproduce a full storage medium.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None, *, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if used + len(value.encode("utf-8")) > self._quota_bytes:
                raise StorageError(f"quota exceeded while writing {key!r}")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> Iterable[str]:
        return list(self._data)
