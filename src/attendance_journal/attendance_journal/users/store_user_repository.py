from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Sequence

from ..core.constants import SESSION_KEY, USERS_KEY
from ..core.enums import Role
from ..core.exceptions import StorageError
from ..storage.base import KeyValueStore
from ..storage.persisted import PersistedValue
from .model import AuthSession, User
from .repository import AuthSessionRepository, UserRepository

logger = logging.getLogger(__name__)


def user_to_row(user: User) -> dict:
    row = {
        "id": user.user_id,
        "role": user.role.value,
        "fullName": user.full_name,
        "email": user.email,
        "passwordHash": user.password_hash,
    }
    if user.group is not None:
        row["group"] = user.group
    if user.student_id is not None:
        row["studentId"] = user.student_id
    return row


def user_from_row(row: dict) -> User:
    return User(
        user_id=str(row["id"]),
        role=Role(row["role"]),
        full_name=row.get("fullName") or "",
        email=row.get("email") or "",
        password_hash=row.get("passwordHash") or "",
        group=row.get("group"),
        student_id=row.get("studentId"),
    )


class StoreUserRepository(UserRepository):
    def __init__(self, store: KeyValueStore, *, defaults: Callable[[], Iterable[User]] = tuple):
        self._users: PersistedValue[List[User]] = PersistedValue(
            store,
            USERS_KEY,
            default=lambda: list(defaults()),
            dump=lambda users: [user_to_row(u) for u in users],
            load=lambda rows: [user_from_row(r) for r in rows],
        )

    @property
    def collection(self) -> PersistedValue[List[User]]:
        return self._users

    def list_all(self) -> Sequence[User]:
        return list(self._users.value)

    def get_by_id(self, user_id: str) -> Optional[User]:
        for user in self._users.value:
            if user.user_id == user_id:
                return user
        return None

    def get_by_email(self, email: str, *, role: Optional[Role] = None) -> Optional[User]:
        needle = email.strip().lower()
        for user in self._users.value:
            if user.email.lower() != needle:
                continue
            if role is not None and user.role != role:
                continue
            return user
        return None

    def add(self, user: User) -> None:
        self._users.set([*self._users.value, user])

    def rename(self, user_id: str, full_name: str) -> bool:
        if not self.get_by_id(user_id):
            return False
        self._users.set(
            [replace(u, full_name=full_name) if u.user_id == user_id else u for u in self._users.value]
        )
        return True


class StoreAuthSessionRepository(AuthSessionRepository):
    """Persisted "stay signed in" pointer.

    Unlike collections this key is optional: it exists only while a
    stay-signed-in session is active.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> Optional[AuthSession]:
        try:
            raw = self._store.get(SESSION_KEY)
        except StorageError as e:
            logger.warning("cannot read saved session: %s", e)
            return None
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return AuthSession(user_id=str(data["userId"]), stay_signed_in=bool(data.get("staySignedIn")))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("saved session is not decodable: %s", e)
            return None

    def save(self, session: AuthSession) -> None:
        if not session.stay_signed_in:
            self.clear()
            return
        payload = json.dumps({"userId": session.user_id, "staySignedIn": True})
        try:
            self._store.set(SESSION_KEY, payload)
        except StorageError as e:
            logger.warning("cannot persist session: %s", e)

    def clear(self) -> None:
        try:
            self._store.remove(SESSION_KEY)
        except StorageError as e:
            logger.warning("cannot remove saved session: %s", e)
