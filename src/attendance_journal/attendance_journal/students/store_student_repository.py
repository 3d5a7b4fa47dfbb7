from __future__ import annotations

from typing import Callable, Collection, Iterable, List, Optional, Sequence

from ..core.constants import STUDENTS_KEY
from ..core.enums import StudentStatus
from ..storage.base import KeyValueStore
from ..storage.persisted import PersistedValue
from .model import StudentProfile
from .repository import StudentRepository


def student_to_row(s: StudentProfile) -> dict:
    row = {
        "id": s.id,
        "firstName": s.first_name,
        "lastName": s.last_name,
        "fullName": s.full_name,
        "email": s.email,
        "studentId": s.student_id,
        "group": s.group,
        "status": s.status.value,
    }
    if s.note is not None:
        row["note"] = s.note
    if s.user_id is not None:
        row["userId"] = s.user_id
    return row


def student_from_row(row: dict) -> StudentProfile:
    return StudentProfile(
        id=str(row["id"]),
        first_name=row.get("firstName") or "",
        last_name=row.get("lastName") or "",
        full_name=row.get("fullName") or "",
        email=row.get("email") or "",
        student_id=row.get("studentId") or "",
        group=row.get("group") or "",
        status=StudentStatus(row.get("status") or StudentStatus.ACTIVE.value),
        note=row.get("note"),
        user_id=row.get("userId"),
    )


class StoreStudentRepository(StudentRepository):
    def __init__(self, store: KeyValueStore, *, defaults: Callable[[], Iterable[StudentProfile]] = tuple):
        self._students: PersistedValue[List[StudentProfile]] = PersistedValue(
            store,
            STUDENTS_KEY,
            default=lambda: list(defaults()),
            dump=lambda items: [student_to_row(s) for s in items],
            load=lambda rows: [student_from_row(r) for r in rows],
        )

    @property
    def collection(self) -> PersistedValue[List[StudentProfile]]:
        return self._students

    def list_all(self) -> Sequence[StudentProfile]:
        return list(self._students.value)

    def get_by_id(self, student_id: str) -> Optional[StudentProfile]:
        for s in self._students.value:
            if s.id == student_id:
                return s
        return None

    def list_by_group(self, group: str) -> Sequence[StudentProfile]:
        return [s for s in self._students.value if s.group == group]

    def add_many(self, students: Sequence[StudentProfile]) -> None:
        if students:
            self._students.set([*self._students.value, *students])

    def replace_many(self, students: Sequence[StudentProfile]) -> int:
        by_id = {s.id: s for s in students}
        matched = sum(1 for s in self._students.value if s.id in by_id)
        if matched:
            self._students.set([by_id.get(s.id, s) for s in self._students.value])
        return matched

    def delete_many(self, ids: Collection[str]) -> int:
        ids = set(ids)
        kept = [s for s in self._students.value if s.id not in ids]
        removed = len(self._students.value) - len(kept)
        if removed:
            self._students.set(kept)
        return removed
