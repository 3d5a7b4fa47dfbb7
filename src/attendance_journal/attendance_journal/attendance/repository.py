from __future__ import annotations

from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceSession


class AttendanceSessionRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceSession]:
        """Sessions, newest first."""

        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def add(self, session: AttendanceSession) -> None:
        raise NotImplementedError

    def delete_by_id(self, session_id: str) -> bool:
        raise NotImplementedError

    def update_record(
        self,
        *,
        session_id: str,
        student_id: str,
        status: AttendanceStatus,
        reason: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def remove_student_records(self, student_ids: Collection[str]) -> int:
        """Cascade for deleted students; returns the number of records removed."""

        raise NotImplementedError
