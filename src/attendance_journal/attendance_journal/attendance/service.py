from __future__ import annotations

import csv
import datetime
import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.ids import new_id
from ..common.validators import require_non_empty, strip_or_none
from ..core.constants import DEFAULT_TIMESLOT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import StudentProfile
from ..students.repository import StudentRepository
from ..users.model import User
from .model import AttendanceRecord, AttendanceSession, AttendanceStats, PersonalRecord
from .repository import AttendanceSessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionRow:
    """A record joined with its student, for the admin session table."""

    student: StudentProfile
    record: AttendanceRecord


@dataclass(frozen=True)
class Overview:
    students: int
    groups: int
    sessions: int


class AttendanceService:
    def __init__(self, sessions: AttendanceSessionRepository, students: StudentRepository):
        self._sessions = sessions
        self._students = students

    def list_sessions(self) -> Sequence[AttendanceSession]:
        return self._sessions.list_all()

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        return self._sessions.get_by_id(session_id)

    def create_session(
        self,
        *,
        discipline: str,
        group: str,
        date: Optional[datetime.date] = None,
        timeslot: Optional[str] = None,
        instructor: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AttendanceSession:
        discipline = require_non_empty(discipline, "Дисциплина")
        group = require_non_empty(group, "Группа")

        # Snapshot of the group as it is now; later arrivals are not back-filled.
        records = tuple(AttendanceRecord(student_id=s.id) for s in self._students.list_by_group(group))

        session = AttendanceSession(
            id=new_id(),
            discipline=discipline,
            group=group,
            date=date or today_local(),
            timeslot=(timeslot or "").strip() or DEFAULT_TIMESLOT,
            instructor=strip_or_none(instructor),
            notes=strip_or_none(notes),
            records=records,
        )
        self._sessions.add(session)
        logger.info("session %s created for %s with %d students", session.id, group, len(records))
        return session

    def delete_session(self, session_id: str) -> bool:
        return self._sessions.delete_by_id(session_id)

    def update_attendance(
        self,
        session_id: str,
        student_id: str,
        status: AttendanceStatus,
        reason: Optional[str] = None,
    ) -> bool:
        """Set one record's status/reason. Unknown session or student is a no-op (False)."""

        if not isinstance(status, AttendanceStatus):
            try:
                status = AttendanceStatus(status)
            except ValueError:
                raise ValidationError("Недопустимый статус посещаемости")

        return self._sessions.update_record(
            session_id=session_id,
            student_id=student_id,
            status=status,
            reason=reason or None,
        )

    def session_rows(self, session: AttendanceSession) -> List[SessionRow]:
        rows: List[SessionRow] = []
        for record in session.records:
            student = self._students.get_by_id(record.student_id)
            if student:
                rows.append(SessionRow(student=student, record=record))
        return rows

    def overview(self) -> Overview:
        students = self._students.list_all()
        return Overview(
            students=len(students),
            groups=len({s.group for s in students}),
            sessions=len(self._sessions.list_all()),
        )

    def find_profile(self, user: User) -> Optional[StudentProfile]:
        students = self._students.list_all()
        for s in students:
            if s.user_id and s.user_id == user.user_id:
                return s
        for s in students:
            if s.email == user.email:
                return s
        return None

    def personal_history(self, profile: StudentProfile) -> List[PersonalRecord]:
        out: List[PersonalRecord] = []
        for session in self._sessions.list_all():
            record = next((r for r in session.records if r.student_id == profile.id), None)
            if record is None:
                continue
            out.append(
                PersonalRecord(
                    session_id=session.id,
                    discipline=session.discipline,
                    date=session.date,
                    group=session.group,
                    timeslot=session.timeslot,
                    status=record.status,
                    reason=record.reason,
                    instructor=session.instructor,
                )
            )
        return out

    @staticmethod
    def personal_stats(records: Sequence[PersonalRecord]) -> AttendanceStats:
        if not records:
            return AttendanceStats()

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
        late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
        return AttendanceStats(
            total=len(records),
            present=present,
            absent=absent,
            late=late,
            attendance_rate=int(present * 100 / len(records) + 0.5),
        )

    def export_session_csv(self, session_id: str) -> str:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise ValidationError("Занятие не найдено")

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["date", "discipline", "group", "full_name", "student_id", "status", "reason"],
        )
        writer.writeheader()
        for row in self.session_rows(session):
            writer.writerow(
                {
                    "date": session.date.isoformat(),
                    "discipline": session.discipline,
                    "group": session.group,
                    "full_name": row.student.full_name,
                    "student_id": row.student.student_id,
                    "status": row.record.status.value,
                    "reason": row.record.reason or "",
                }
            )
        return out.getvalue()
