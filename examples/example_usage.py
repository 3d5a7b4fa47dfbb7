"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the journal's rules live in the services.
"""

from src.attendance_journal.attendance_journal.container import build_container
from src.attendance_journal.attendance_journal.core.enums import AttendanceStatus, Role
from src.attendance_journal.attendance_journal.storage.memory_store import MemoryStore


def main():
    container = build_container(storage_config={"backend": "memory"}, store=MemoryStore())
    container.auth_service.login("admin@misis.ru", "admin1234", Role.ADMIN)

    session = container.attendance_service.create_session(discipline="Математический анализ", group="БПМ-21-1")
    container.attendance_service.update_attendance(session.id, "stu-2", AttendanceStatus.LATE, "Транспорт")

    for row in container.attendance_service.session_rows(session):
        print(row.student.full_name, row.record.status.value, row.record.reason or "")


if __name__ == "__main__":
    main()
