from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role; decides which console the user lands on."""

    ADMIN = "admin"
    STUDENT = "student"


class StudentStatus(str, Enum):
    """Academic standing of a student profile."""

    ACTIVE = "active"
    ACADEMIC_LEAVE = "academic leave"
    EXPELLED = "expelled"


class AttendanceStatus(str, Enum):
    """Outcome of one student in one class session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
