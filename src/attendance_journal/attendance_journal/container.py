from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .attendance.service import AttendanceService
from .attendance.store_session_repository import StoreSessionRepository
from .storage.base import KeyValueStore
from .storage.factory import build_store
from .storage.seed import demo_sessions, demo_students, demo_users
from .students.service import StudentService
from .students.store_student_repository import StoreStudentRepository
from .users.service import AuthService
from .users.store_user_repository import StoreAuthSessionRepository
from .users.store_user_repository import StoreUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyValueStore

    users_repo: StoreUserRepository
    auth_sessions_repo: StoreAuthSessionRepository
    students_repo: StoreStudentRepository
    sessions_repo: StoreSessionRepository

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService


def _log_change(key: str, value: Any) -> None:
    logger.debug("%s changed (%d items)", key, len(value))


def build_container(*, storage_config: dict, store: Optional[KeyValueStore] = None, seed_demo_data: bool = True) -> Container:
    store = store if store is not None else build_store(storage_config)

    users_repo = StoreUserRepository(store, defaults=demo_users if seed_demo_data else tuple)
    auth_sessions_repo = StoreAuthSessionRepository(store)
    students_repo = StoreStudentRepository(store, defaults=demo_students if seed_demo_data else tuple)
    sessions_repo = StoreSessionRepository(store, defaults=demo_sessions if seed_demo_data else tuple)

    for repo in (users_repo, students_repo, sessions_repo):
        repo.collection.subscribe(_log_change)

    auth_service = AuthService(users_repo, auth_sessions_repo)
    auth_service.migrate_legacy_admin_name()
    student_service = StudentService(students_repo, sessions_repo)
    attendance_service = AttendanceService(sessions_repo, students_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        auth_sessions_repo=auth_sessions_repo,
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        auth_service=auth_service,
        student_service=student_service,
        attendance_service=attendance_service,
    )
