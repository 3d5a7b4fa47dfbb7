from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import StudentStatus


def compose_full_name(first_name: str, last_name: str) -> str:
    return f"{first_name.strip()} {last_name.strip()}".strip()


@dataclass(frozen=True)
class StudentProfile:
    """Domain entity: one student on the roster."""

    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    student_id: str
    group: str
    status: StudentStatus = StudentStatus.ACTIVE
    note: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(frozen=True)
class StudentImportRow:
    """One parsed line of a roster file, before validation."""

    first_name: str
    last_name: str
    email: str
    student_id: str
    group: str
    status: StudentStatus = StudentStatus.ACTIVE

    def is_complete(self) -> bool:
        return all((self.first_name, self.last_name, self.email, self.student_id, self.group))
