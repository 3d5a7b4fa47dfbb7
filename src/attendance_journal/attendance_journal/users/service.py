from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..common.validators import require_min_length, require_non_empty, strip_or_none
from ..core.constants import (
    ADMIN_DISPLAY_NAME,
    LEGACY_ADMIN_EMAIL,
    LEGACY_ADMIN_ID,
    LEGACY_ADMIN_NAME_MARKER,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import Role
from ..core.exceptions import DuplicateEmailError, UserNotFoundError, ValidationError, WrongPasswordError
from .model import AuthSession, User
from .repository import AuthSessionRepository, UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign in, register, sign out.

    Holds the single active session of this process. A session opened with
    ``stay_signed_in`` is written to the store and picked up again by the
    next instance built over the same store; any other session lives only as
    long as this object.
    """

    def __init__(self, users: UserRepository, sessions: AuthSessionRepository):
        self._users = users
        self._sessions = sessions
        self._session: Optional[AuthSession] = sessions.load()

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def current_user(self) -> Optional[User]:
        if self._session is None:
            return None
        return self._users.get_by_id(self._session.user_id)

    def _start_session(self, user: User, *, stay_signed_in: bool) -> None:
        self._session = AuthSession(user_id=user.user_id, stay_signed_in=stay_signed_in)
        self._sessions.save(self._session)

    def get_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self._users.get_by_id(user_id)

    def authenticate(self, email: str, password: str, role: Role) -> User:
        """Check credentials without touching the active session."""
        user = self._users.get_by_email(email or "", role=role)
        if not user:
            raise UserNotFoundError("Пользователь не найден")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. legacy plaintext or corrupted values
            ok = False

        if not ok:
            raise WrongPasswordError("Неверный пароль")
        return user

    def login(self, email: str, password: str, role: Role, *, stay_signed_in: bool = False) -> User:
        user = self.authenticate(email, password, role)
        self._start_session(user, stay_signed_in=stay_signed_in)
        logger.info("user %s signed in as %s (stay_signed_in=%s)", user.user_id, role.value, stay_signed_in)
        return user

    def create_account(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        role: Role,
        group: Optional[str] = None,
        student_id: Optional[str] = None,
        confirm_password: Optional[str] = None,
    ) -> User:
        full_name = require_non_empty(full_name, "ФИО")
        email = require_non_empty(email, "E-mail").lower()
        require_min_length(password, "Пароль", MIN_PASSWORD_LENGTH)
        if confirm_password is not None and password != confirm_password:
            raise ValidationError("Пароли не совпадают")

        if self._users.get_by_email(email):
            raise DuplicateEmailError("Пользователь с таким e-mail уже существует")

        is_student = role == Role.STUDENT
        user = User(
            user_id=new_id(),
            role=role,
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            group=(strip_or_none(group) or None) if is_student else None,
            student_id=(strip_or_none(student_id) or None) if is_student else None,
        )
        self._users.add(user)
        logger.info("registered %s account %s", role.value, user.user_id)
        return user

    def register(self, **fields) -> User:
        """Create an account and keep its owner signed in."""
        user = self.create_account(**fields)
        self._start_session(user, stay_signed_in=True)
        return user

    def logout(self) -> None:
        self._session = None
        self._sessions.clear()

    def migrate_legacy_admin_name(self) -> bool:
        """Rename the built-in admin account stored under its old display name."""
        admin = self._users.get_by_id(LEGACY_ADMIN_ID) or self._users.get_by_email(LEGACY_ADMIN_EMAIL)
        if not admin or LEGACY_ADMIN_NAME_MARKER not in admin.full_name:
            return False
        logger.info("renaming legacy admin account %s", admin.user_id)
        return self._users.rename(admin.user_id, ADMIN_DISPLAY_NAME)
