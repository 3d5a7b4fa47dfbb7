from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import AuthSession, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str, *, role: Optional[Role] = None) -> Optional[User]:
        raise NotImplementedError

    def add(self, user: User) -> None:
        raise NotImplementedError

    def rename(self, user_id: str, full_name: str) -> bool:
        raise NotImplementedError


class AuthSessionRepository(Protocol):
    def load(self) -> Optional[AuthSession]:
        raise NotImplementedError

    def save(self, session: AuthSession) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError
