from __future__ import annotations

from typing import Iterable, Optional, Protocol


class KeyValueStore(Protocol):
    """Synchronous string key-value storage.

    Values are opaque strings (JSON text in practice). Backends raise
    ``StorageError`` when the underlying medium fails; callers decide whether
    that is fatal.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def keys(self) -> Iterable[str]:
        raise NotImplementedError
