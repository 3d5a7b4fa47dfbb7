from __future__ import annotations

import json

import pytest

from src.attendance_journal.attendance_journal.container import build_container
from src.attendance_journal.attendance_journal.core.constants import SESSION_KEY, USERS_KEY
from src.attendance_journal.attendance_journal.core.enums import Role
from src.attendance_journal.attendance_journal.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    UserNotFoundError,
    ValidationError,
    WrongPasswordError,
)
from src.attendance_journal.attendance_journal.storage.memory_store import MemoryStore


def _reload(store):
    return build_container(storage_config={"backend": "memory"}, store=store, seed_demo_data=False)


def _register_student(container, email="Ivan@Misis.ru", password="secret1"):
    return container.auth_service.register(
        full_name="  Иван Петров ",
        email=email,
        password=password,
        role=Role.STUDENT,
        group="БПМ-21-2",
        student_id="21БПМ104",
    )


def test_register_logs_in_and_normalizes(container):
    user = _register_student(container)

    assert user.email == "ivan@misis.ru"
    assert user.full_name == "Иван Петров"
    assert user.group == "БПМ-21-2"
    assert container.auth_service.current_user == user
    assert container.auth_service.session.stay_signed_in is True


def test_register_duplicate_email_is_case_insensitive(container):
    _register_student(container)
    container.auth_service.logout()

    with pytest.raises(DuplicateEmailError):
        container.auth_service.register(
            full_name="Other",
            email="IVAN@misis.RU",
            password="another1",
            role=Role.ADMIN,
        )
    assert len(container.users_repo.list_all()) == 1


def test_register_rejects_short_and_mismatched_passwords(container):
    with pytest.raises(ValidationError):
        _register_student(container, password="12345")

    with pytest.raises(ValidationError):
        container.auth_service.register(
            full_name="A",
            email="a@misis.ru",
            password="secret1",
            confirm_password="secret2",
            role=Role.STUDENT,
        )
    assert container.users_repo.list_all() == []


def test_admin_registration_drops_student_fields(container):
    user = container.auth_service.register(
        full_name="Admin",
        email="boss@misis.ru",
        password="secret1",
        role=Role.ADMIN,
        group="G",
        student_id="S",
    )
    assert user.group is None
    assert user.student_id is None


def test_password_is_not_stored_in_plain_text(container, store):
    _register_student(container, password="secret1")

    raw = store.get(USERS_KEY)
    assert "secret1" not in raw
    assert json.loads(raw)[0]["passwordHash"]


def test_user_rows_keep_the_hash_under_password_hash_only(container, store):
    _register_student(container, password="secret1")

    row = json.loads(store.get(USERS_KEY))[0]

    assert "password" not in row
    assert row["passwordHash"].startswith(("scrypt:", "pbkdf2:"))


def test_blank_student_fields_are_stored_as_missing(container, store):
    user = container.auth_service.register(
        full_name="Иван Петров",
        email="ivan@misis.ru",
        password="secret1",
        role=Role.STUDENT,
        group="   ",
        student_id="",
    )

    assert user.group is None
    assert user.student_id is None
    row = json.loads(store.get(USERS_KEY))[0]
    assert "group" not in row
    assert "studentId" not in row


def test_authenticate_leaves_active_session_alone(container, store):
    _register_student(container)
    container.auth_service.logout()

    user = container.auth_service.authenticate("ivan@misis.ru", "secret1", Role.STUDENT)

    assert user.email == "ivan@misis.ru"
    assert container.auth_service.current_user is None
    assert store.get(SESSION_KEY) is None
    with pytest.raises(WrongPasswordError):
        container.auth_service.authenticate("ivan@misis.ru", "wrong11", Role.STUDENT)


def test_create_account_does_not_sign_in(container):
    user = container.auth_service.create_account(
        full_name="Мария", email="m@misis.ru", password="secret1", role=Role.STUDENT
    )

    assert container.auth_service.current_user is None
    assert container.auth_service.get_user(user.user_id) == user
    assert container.auth_service.get_user(None) is None


def test_wrong_password_differs_from_unknown_user(container):
    _register_student(container)
    container.auth_service.logout()

    with pytest.raises(WrongPasswordError):
        container.auth_service.login("ivan@misis.ru", "nope", Role.STUDENT)
    with pytest.raises(UserNotFoundError):
        container.auth_service.login("ghost@misis.ru", "secret1", Role.STUDENT)
    assert container.auth_service.current_user is None


def test_login_requires_matching_role(container):
    _register_student(container)
    container.auth_service.logout()

    with pytest.raises(UserNotFoundError):
        container.auth_service.login("ivan@misis.ru", "secret1", Role.ADMIN)


def test_login_email_is_trimmed_and_case_insensitive(container):
    _register_student(container)
    container.auth_service.logout()

    user = container.auth_service.login("  IVAN@misis.ru ", "secret1", Role.STUDENT)
    assert container.auth_service.current_user == user


def test_stay_signed_in_survives_reload(container, store):
    user = _register_student(container)
    container.auth_service.logout()

    container.auth_service.login("ivan@misis.ru", "secret1", Role.STUDENT, stay_signed_in=True)

    assert _reload(store).auth_service.current_user == user


def test_session_without_stay_signed_in_is_not_restored(container, store):
    _register_student(container)
    container.auth_service.logout()

    container.auth_service.login("ivan@misis.ru", "secret1", Role.STUDENT, stay_signed_in=False)

    assert container.auth_service.current_user is not None
    assert store.get(SESSION_KEY) is None
    assert _reload(store).auth_service.current_user is None


def test_logout_clears_persisted_session(container, store):
    _register_student(container)
    assert store.get(SESSION_KEY) is not None

    container.auth_service.logout()

    assert store.get(SESSION_KEY) is None
    assert container.auth_service.current_user is None


def test_legacy_plaintext_password_never_matches():
    store = MemoryStore(
        {
            USERS_KEY: json.dumps(
                [{"id": "u1", "role": "admin", "fullName": "A", "email": "a@misis.ru", "passwordHash": "admin1234"}]
            )
        }
    )
    container = _reload(store)

    with pytest.raises(AuthenticationError):
        container.auth_service.login("a@misis.ru", "admin1234", Role.ADMIN)


def test_legacy_admin_name_is_patched_on_startup():
    store = MemoryStore(
        {
            USERS_KEY: json.dumps(
                [
                    {
                        "id": "admin-1",
                        "role": "admin",
                        "fullName": "Администратор МИСиС",
                        "email": "admin@misis.ru",
                        "passwordHash": "x",
                    }
                ]
            )
        }
    )

    container = _reload(store)

    assert container.users_repo.get_by_id("admin-1").full_name == "Администратор МИСИС"
    assert json.loads(store.get(USERS_KEY))[0]["fullName"] == "Администратор МИСИС"


def test_demo_accounts_can_sign_in(demo_container):
    admin = demo_container.auth_service.login("admin@misis.ru", "admin1234", Role.ADMIN)
    assert admin.user_id == "admin-1"

    student = demo_container.auth_service.login("a.lebedeva@misis.ru", "student123", Role.STUDENT)
    assert student.student_id == "21БПМ101"
