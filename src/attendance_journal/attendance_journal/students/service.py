from __future__ import annotations

import logging
from dataclasses import replace
from typing import Collection, List, Optional, Sequence, Union

from ..attendance.repository import AttendanceSessionRepository
from ..common.ids import new_id
from ..common.validators import require_non_empty, strip_or_none
from ..core.enums import StudentStatus
from ..core.exceptions import ImportFormatError, ValidationError
from .csv_import import parse_roster_csv
from .model import StudentImportRow, StudentProfile, compose_full_name
from .repository import StudentRepository

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


class StudentService:
    """Use case: maintain the roster (admin console)."""

    def __init__(self, students: StudentRepository, sessions: AttendanceSessionRepository):
        self._students = students
        self._sessions = sessions

    # -- queries -----------------------------------------------------------

    def list_students(self) -> Sequence[StudentProfile]:
        return self._students.list_all()

    def get_student(self, profile_id: str) -> Optional[StudentProfile]:
        return self._students.get_by_id(profile_id)

    def list_groups(self) -> List[str]:
        groups: List[str] = []
        for s in self._students.list_all():
            if s.group not in groups:
                groups.append(s.group)
        return groups

    def filter_students(
        self,
        query: str = "",
        status: Union[StudentStatus, str] = STATUS_FILTER_ALL,
    ) -> List[StudentProfile]:
        needle = (query or "").lower()
        if status != STATUS_FILTER_ALL and not isinstance(status, StudentStatus):
            status = StudentStatus(status)

        out: List[StudentProfile] = []
        for s in self._students.list_all():
            haystack = (s.full_name, s.group, s.student_id, s.email)
            if needle and not any(needle in field.lower() for field in haystack):
                continue
            if status != STATUS_FILTER_ALL and s.status != status:
                continue
            out.append(s)
        return out

    # -- commands ----------------------------------------------------------

    def add_student(
        self,
        *,
        first_name: str,
        last_name: str,
        group: str,
        email: str = "",
        student_id: str = "",
        status: StudentStatus = StudentStatus.ACTIVE,
        note: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> StudentProfile:
        first_name = require_non_empty(first_name, "Имя")
        last_name = require_non_empty(last_name, "Фамилия")
        group = require_non_empty(group, "Группа")

        student = StudentProfile(
            id=new_id(),
            first_name=first_name,
            last_name=last_name,
            full_name=compose_full_name(first_name, last_name),
            email=(email or "").strip().lower(),
            student_id=(student_id or "").strip(),
            group=group,
            status=status,
            note=strip_or_none(note),
            user_id=user_id,
        )
        self._students.add_many([student])
        logger.info("student %s added to group %s", student.id, group)
        return student

    def _merged(self, s: StudentProfile, changes: dict) -> StudentProfile:
        fields = {k: v for k, v in changes.items() if v is not None}

        for key, label in (("first_name", "Имя"), ("last_name", "Фамилия"), ("group", "Группа")):
            if key in fields:
                fields[key] = require_non_empty(fields[key], label)
        if "email" in fields:
            fields["email"] = fields["email"].strip().lower()
        if "student_id" in fields:
            fields["student_id"] = fields["student_id"].strip()
        if "note" in fields:
            fields["note"] = fields["note"].strip()
        if "status" in fields and not isinstance(fields["status"], StudentStatus):
            fields["status"] = StudentStatus(fields["status"])

        merged = replace(s, **fields)
        return replace(merged, full_name=compose_full_name(merged.first_name, merged.last_name))

    def update_student(
        self,
        profile_id: str,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        student_id: Optional[str] = None,
        group: Optional[str] = None,
        status: Optional[StudentStatus] = None,
        note: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> StudentProfile:
        student = self._students.get_by_id(profile_id)
        if not student:
            raise ValidationError("Студент не найден")

        updated = self._merged(
            student,
            dict(
                first_name=first_name,
                last_name=last_name,
                email=email,
                student_id=student_id,
                group=group,
                status=status,
                note=note,
                user_id=user_id,
            ),
        )
        self._students.replace_many([updated])
        return updated

    def bulk_update_students(
        self,
        ids: Collection[str],
        *,
        status: Optional[StudentStatus] = None,
        group: Optional[str] = None,
        note: Optional[str] = None,
    ) -> int:
        ids = set(ids)
        changes = dict(status=status, group=group, note=note)
        updated = [self._merged(s, changes) for s in self._students.list_all() if s.id in ids]
        if not updated:
            return 0
        return self._students.replace_many(updated)

    def delete_student(self, profile_id: str) -> bool:
        return self.bulk_delete_students([profile_id]) > 0

    def bulk_delete_students(self, ids: Collection[str]) -> int:
        ids = set(ids)
        if not ids:
            return 0
        removed = self._students.delete_many(ids)
        pruned = self._sessions.remove_student_records(ids)
        logger.info("deleted %d students, pruned %d attendance records", removed, pruned)
        return removed

    def import_students(self, rows: Sequence[StudentImportRow]) -> int:
        """Append every complete row; incomplete rows are dropped without a trace."""

        admitted = [
            StudentProfile(
                id=new_id(),
                first_name=row.first_name.strip(),
                last_name=row.last_name.strip(),
                full_name=compose_full_name(row.first_name, row.last_name),
                email=row.email.strip().lower(),
                student_id=row.student_id.strip(),
                group=row.group.strip(),
                status=row.status or StudentStatus.ACTIVE,
            )
            for row in rows
            if row.is_complete()
        ]
        if not admitted:
            return 0

        self._students.add_many(admitted)
        logger.info("imported %d of %d roster rows", len(admitted), len(rows))
        return len(admitted)

    def import_csv(self, text: str) -> int:
        created = self.import_students(parse_roster_csv(text))
        if not created:
            raise ImportFormatError("Не удалось распознать данные. Проверьте формат CSV.")
        return created
