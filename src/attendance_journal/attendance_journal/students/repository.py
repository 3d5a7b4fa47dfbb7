from __future__ import annotations

from typing import Collection, Optional, Protocol, Sequence

from .model import StudentProfile


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[StudentProfile]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[StudentProfile]:
        raise NotImplementedError

    def list_by_group(self, group: str) -> Sequence[StudentProfile]:
        raise NotImplementedError

    def add_many(self, students: Sequence[StudentProfile]) -> None:
        raise NotImplementedError

    def replace_many(self, students: Sequence[StudentProfile]) -> int:
        """Swap stored profiles for the given ones (matched by id); returns how many matched."""

        raise NotImplementedError

    def delete_many(self, ids: Collection[str]) -> int:
        raise NotImplementedError
