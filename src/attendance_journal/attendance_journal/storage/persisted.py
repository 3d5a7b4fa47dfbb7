from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, List, TypeVar

from ..core.exceptions import StorageError
from .base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[str, Any], None]


def _identity(value: Any) -> Any:
    return value


class PersistedValue(Generic[T]):
    """In-memory mirror of one JSON document in a key-value store.

    The value is read once on construction. A missing key, unreadable store or
    undecodable document falls back to ``default`` (which is then written
    back). Every ``set`` replaces the in-memory value first, then serializes
    the whole value to the store and notifies subscribers.

    Write failures are logged and swallowed: the mirror stays authoritative
    until the next successful write or until the process restarts, at which
    point the last persisted snapshot is read back.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        default: Callable[[], T],
        *,
        dump: Callable[[T], Any] = _identity,
        load: Callable[[Any], T] = _identity,
    ):
        self._store = store
        self._key = key
        self._dump = dump
        self._load = load
        self._listeners: List[Listener] = []
        self._value = self._read(default)

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> T:
        return self._value

    def _read(self, default: Callable[[], T]) -> T:
        try:
            raw = self._store.get(self._key)
        except StorageError as e:
            logger.warning("storage read failed for %s, using default: %s", self._key, e)
            return default()

        if raw is None:
            value = default()
            self._write(value)
            return value

        try:
            return self._load(json.loads(raw))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("stored %s is not decodable, using default: %s", self._key, e)
            return default()

    def _write(self, value: T) -> bool:
        try:
            self._store.set(self._key, json.dumps(self._dump(value), ensure_ascii=False))
        except StorageError as e:
            logger.warning("storage write failed for %s, keeping in-memory state: %s", self._key, e)
            return False
        return True

    def set(self, value: T) -> bool:
        """Replace the value; returns whether it reached the store."""
        self._value = value
        persisted = self._write(value)
        for listener in list(self._listeners):
            listener(self._key, value)
        return persisted

    def update(self, fn: Callable[[T], T]) -> bool:
        return self.set(fn(self._value))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change callback; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
