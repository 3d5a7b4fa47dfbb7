"""Demo data written to an empty store."""
from __future__ import annotations

from typing import List

from werkzeug.security import generate_password_hash

from ..attendance.model import AttendanceRecord, AttendanceSession
from ..common.datetime_utils import today_local
from ..core.enums import AttendanceStatus, Role, StudentStatus
from ..students.model import StudentProfile
from ..users.model import User


def demo_users() -> List[User]:
    return [
        User(
            user_id="admin-1",
            role=Role.ADMIN,
            full_name="Администратор МИСИС",
            email="admin@misis.ru",
            password_hash=generate_password_hash("admin1234"),
        ),
        User(
            user_id="student-1",
            role=Role.STUDENT,
            full_name="Анна Лебедева",
            email="a.lebedeva@misis.ru",
            password_hash=generate_password_hash("student123"),
            group="БПМ-21-1",
            student_id="21БПМ101",
        ),
    ]


def demo_students() -> List[StudentProfile]:
    return [
        StudentProfile(
            id="stu-1",
            user_id="student-1",
            first_name="Анна",
            last_name="Лебедева",
            full_name="Анна Лебедева",
            email="a.lebedeva@misis.ru",
            student_id="21БПМ101",
            group="БПМ-21-1",
            status=StudentStatus.ACTIVE,
            note="Староста группы",
        ),
        StudentProfile(
            id="stu-2",
            first_name="Максим",
            last_name="Гордеев",
            full_name="Максим Гордеев",
            email="m.gordeev@misis.ru",
            student_id="21БПМ102",
            group="БПМ-21-1",
        ),
        StudentProfile(
            id="stu-3",
            first_name="Дарья",
            last_name="Фомина",
            full_name="Дарья Фомина",
            email="d.fomina@misis.ru",
            student_id="21БПМ103",
            group="БПМ-21-2",
        ),
    ]


def demo_sessions() -> List[AttendanceSession]:
    return [
        AttendanceSession(
            id="session-1",
            discipline="Алгоритмы и структуры данных",
            group="БПМ-21-1",
            date=today_local(),
            timeslot="08:30 — 10:05",
            instructor="Проф. И. А. Сафронов",
            notes="Контрольная работа",
            records=(
                AttendanceRecord(student_id="stu-1", status=AttendanceStatus.PRESENT),
                AttendanceRecord(student_id="stu-2", status=AttendanceStatus.ABSENT, reason="Болезнь"),
            ),
        )
    ]
