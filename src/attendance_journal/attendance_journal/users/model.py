from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account that can sign in.

    Note: Plain data object; persistence lives in the repositories.
    """

    user_id: str
    role: Role
    full_name: str
    email: str
    password_hash: str
    group: Optional[str] = None
    student_id: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """Pointer to the signed-in account."""

    user_id: str
    stay_signed_in: bool
