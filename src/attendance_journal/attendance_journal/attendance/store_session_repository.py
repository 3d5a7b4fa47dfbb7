from __future__ import annotations

from dataclasses import replace
from typing import Callable, Collection, Iterable, List, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import SESSIONS_KEY
from ..core.enums import AttendanceStatus
from ..storage.base import KeyValueStore
from ..storage.persisted import PersistedValue
from .model import AttendanceRecord, AttendanceSession
from .repository import AttendanceSessionRepository


def record_to_row(r: AttendanceRecord) -> dict:
    row = {"studentId": r.student_id, "status": r.status.value}
    if r.reason is not None:
        row["reason"] = r.reason
    return row


def session_to_row(s: AttendanceSession) -> dict:
    row = {
        "id": s.id,
        "discipline": s.discipline,
        "group": s.group,
        "date": s.date.isoformat(),
        "timeslot": s.timeslot,
        "records": [record_to_row(r) for r in s.records],
    }
    if s.instructor is not None:
        row["instructor"] = s.instructor
    if s.notes is not None:
        row["notes"] = s.notes
    return row


def session_from_row(row: dict) -> AttendanceSession:
    return AttendanceSession(
        id=str(row["id"]),
        discipline=row.get("discipline") or "",
        group=row.get("group") or "",
        date=parse_iso_date(row["date"]),
        timeslot=row.get("timeslot") or "",
        instructor=row.get("instructor"),
        notes=row.get("notes"),
        records=tuple(
            AttendanceRecord(
                student_id=str(r["studentId"]),
                status=AttendanceStatus(r.get("status") or AttendanceStatus.PRESENT.value),
                reason=r.get("reason"),
            )
            for r in row.get("records") or []
        ),
    )


class StoreSessionRepository(AttendanceSessionRepository):
    def __init__(self, store: KeyValueStore, *, defaults: Callable[[], Iterable[AttendanceSession]] = tuple):
        self._sessions: PersistedValue[List[AttendanceSession]] = PersistedValue(
            store,
            SESSIONS_KEY,
            default=lambda: list(defaults()),
            dump=lambda items: [session_to_row(s) for s in items],
            load=lambda rows: [session_from_row(r) for r in rows],
        )

    @property
    def collection(self) -> PersistedValue[List[AttendanceSession]]:
        return self._sessions

    def list_all(self) -> Sequence[AttendanceSession]:
        return list(self._sessions.value)

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        for s in self._sessions.value:
            if s.id == session_id:
                return s
        return None

    def add(self, session: AttendanceSession) -> None:
        self._sessions.set([session, *self._sessions.value])

    def delete_by_id(self, session_id: str) -> bool:
        kept = [s for s in self._sessions.value if s.id != session_id]
        if len(kept) == len(self._sessions.value):
            return False
        self._sessions.set(kept)
        return True

    def update_record(
        self,
        *,
        session_id: str,
        student_id: str,
        status: AttendanceStatus,
        reason: Optional[str] = None,
    ) -> bool:
        session = self.get_by_id(session_id)
        if not session or not any(r.student_id == student_id for r in session.records):
            return False

        records = tuple(
            replace(r, status=status, reason=reason) if r.student_id == student_id else r
            for r in session.records
        )
        self._sessions.set(
            [replace(s, records=records) if s.id == session_id else s for s in self._sessions.value]
        )
        return True

    def remove_student_records(self, student_ids: Collection[str]) -> int:
        student_ids = set(student_ids)
        removed = 0
        updated: List[AttendanceSession] = []
        for s in self._sessions.value:
            kept = tuple(r for r in s.records if r.student_id not in student_ids)
            removed += len(s.records) - len(kept)
            updated.append(replace(s, records=kept) if len(kept) != len(s.records) else s)
        if removed:
            self._sessions.set(updated)
        return removed
