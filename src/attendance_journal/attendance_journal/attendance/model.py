from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's outcome in one class session."""

    student_id: str
    status: AttendanceStatus = AttendanceStatus.PRESENT
    reason: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSession:
    """One class meeting with the roster snapshot taken when it was created."""

    id: str
    discipline: str
    group: str
    date: date
    timeslot: str
    instructor: Optional[str] = None
    notes: Optional[str] = None
    records: Tuple[AttendanceRecord, ...] = ()


@dataclass(frozen=True)
class PersonalRecord:
    """Read-model row for the student view."""

    session_id: str
    discipline: str
    date: date
    group: str
    timeslot: str
    status: AttendanceStatus
    reason: Optional[str] = None
    instructor: Optional[str] = None


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    attendance_rate: int = 0
