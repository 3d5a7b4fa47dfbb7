from __future__ import annotations

from datetime import date

import pytest

from src.attendance_journal.attendance_journal.attendance.model import PersonalRecord
from src.attendance_journal.attendance_journal.attendance.service import AttendanceService
from src.attendance_journal.attendance_journal.core.constants import DEFAULT_TIMESLOT
from src.attendance_journal.attendance_journal.core.enums import AttendanceStatus, Role
from src.attendance_journal.attendance_journal.core.exceptions import ValidationError
from src.attendance_journal.attendance_journal.users.model import User


def _student(container, first, last, group, **kw):
    return container.student_service.add_student(first_name=first, last_name=last, group=group, **kw)


def _record(status: AttendanceStatus) -> PersonalRecord:
    return PersonalRecord(
        session_id="s", discipline="d", date=date(2024, 9, 2), group="g", timeslot="t", status=status
    )


def test_create_session_snapshots_group_with_everyone_present(container):
    a = _student(container, "Анна", "А", "G1")
    b = _student(container, "Борис", "Б", "G1")
    _student(container, "Вера", "В", "G2")

    session = container.attendance_service.create_session(
        discipline=" Алгебра ", group=" G1 ", date=date(2024, 9, 2), instructor="  "
    )

    assert session.discipline == "Алгебра"
    assert session.group == "G1"
    assert session.date == date(2024, 9, 2)
    assert session.timeslot == DEFAULT_TIMESLOT
    assert [r.student_id for r in session.records] == [a.id, b.id]
    assert all(r.status == AttendanceStatus.PRESENT and r.reason is None for r in session.records)
    assert container.attendance_service.get_session(session.id) == session


def test_create_session_for_empty_group_has_no_records(container):
    session = container.attendance_service.create_session(discipline="Алгебра", group="G9")
    assert session.records == ()


def test_create_session_requires_discipline_and_group(container):
    with pytest.raises(ValidationError):
        container.attendance_service.create_session(discipline="  ", group="G1")
    with pytest.raises(ValidationError):
        container.attendance_service.create_session(discipline="Алгебра", group="")
    assert container.attendance_service.list_sessions() == []


def test_new_students_are_not_added_to_existing_sessions(container):
    _student(container, "Анна", "А", "G1")
    session = container.attendance_service.create_session(discipline="Алгебра", group="G1")

    _student(container, "Борис", "Б", "G1")

    assert len(container.attendance_service.get_session(session.id).records) == 1


def test_sessions_are_listed_newest_first(container):
    first = container.attendance_service.create_session(discipline="Алгебра", group="G1")
    second = container.attendance_service.create_session(discipline="Физика", group="G1")

    assert [s.id for s in container.attendance_service.list_sessions()] == [second.id, first.id]


def test_update_attendance_changes_one_record(container):
    a = _student(container, "Анна", "А", "G1")
    b = _student(container, "Борис", "Б", "G1")
    session = container.attendance_service.create_session(discipline="Алгебра", group="G1")

    assert container.attendance_service.update_attendance(session.id, a.id, "absent", "Болезнь") is True

    records = {r.student_id: r for r in container.attendance_service.get_session(session.id).records}
    assert records[a.id].status == AttendanceStatus.ABSENT
    assert records[a.id].reason == "Болезнь"
    assert records[b.id].status == AttendanceStatus.PRESENT


def test_update_attendance_unknown_targets_are_noops(container):
    a = _student(container, "Анна", "А", "G1")
    session = container.attendance_service.create_session(discipline="Алгебра", group="G1")

    assert container.attendance_service.update_attendance("missing", a.id, AttendanceStatus.LATE) is False
    assert container.attendance_service.update_attendance(session.id, "missing", AttendanceStatus.LATE) is False
    assert container.attendance_service.get_session(session.id) == session


def test_update_attendance_rejects_unknown_status(container):
    a = _student(container, "Анна", "А", "G1")
    session = container.attendance_service.create_session(discipline="Алгебра", group="G1")

    with pytest.raises(ValidationError):
        container.attendance_service.update_attendance(session.id, a.id, "sleeping")


def test_delete_session(container):
    session = container.attendance_service.create_session(discipline="Алгебра", group="G1")

    assert container.attendance_service.delete_session(session.id) is True
    assert container.attendance_service.delete_session(session.id) is False
    assert container.attendance_service.list_sessions() == []


def test_overview_counts(demo_container):
    overview = demo_container.attendance_service.overview()

    assert (overview.students, overview.groups, overview.sessions) == (3, 2, 1)


def test_find_profile_prefers_link_then_email(container):
    linked = _student(container, "Анна", "А", "G1", email="other@m.ru", user_id="u-1")
    by_email = _student(container, "Борис", "Б", "G1", email="b@m.ru")
    user = User(user_id="u-1", role=Role.STUDENT, full_name="Анна", email="b@m.ru", password_hash="x")
    stranger = User(user_id="u-2", role=Role.STUDENT, full_name="Х", email="b@m.ru", password_hash="x")
    nobody = User(user_id="u-3", role=Role.STUDENT, full_name="Y", email="y@m.ru", password_hash="x")

    assert container.attendance_service.find_profile(user) == linked
    assert container.attendance_service.find_profile(stranger) == by_email
    assert container.attendance_service.find_profile(nobody) is None


def test_personal_history_only_lists_sessions_with_the_student(container):
    a = _student(container, "Анна", "А", "G1")
    _student(container, "Вера", "В", "G2")
    math = container.attendance_service.create_session(discipline="Алгебра", group="G1", instructor="Иванов")
    container.attendance_service.create_session(discipline="Физика", group="G2")
    container.attendance_service.update_attendance(math.id, a.id, AttendanceStatus.LATE, "Транспорт")

    [record] = container.attendance_service.personal_history(a)

    assert record.session_id == math.id
    assert record.discipline == "Алгебра"
    assert record.status == AttendanceStatus.LATE
    assert record.reason == "Транспорт"
    assert record.instructor == "Иванов"


def test_personal_stats_counts_and_rounds_rate():
    stats = AttendanceService.personal_stats(
        [_record(AttendanceStatus.PRESENT), _record(AttendanceStatus.PRESENT), _record(AttendanceStatus.LATE)]
    )

    assert (stats.total, stats.present, stats.absent, stats.late) == (3, 2, 0, 1)
    assert stats.attendance_rate == 67


def test_personal_stats_rounds_half_up():
    records = [_record(AttendanceStatus.PRESENT)] + [_record(AttendanceStatus.ABSENT)] * 7

    assert AttendanceService.personal_stats(records).attendance_rate == 13


def test_personal_stats_empty_history():
    stats = AttendanceService.personal_stats([])

    assert stats.total == 0
    assert stats.attendance_rate == 0


def test_demo_student_sees_seeded_session(demo_container):
    user = demo_container.auth_service.login("a.lebedeva@misis.ru", "student123", Role.STUDENT)
    profile = demo_container.attendance_service.find_profile(user)

    records = demo_container.attendance_service.personal_history(profile)

    assert profile.id == "stu-1"
    assert [r.session_id for r in records] == ["session-1"]
    assert demo_container.attendance_service.personal_stats(records).attendance_rate == 100


def test_export_session_csv(container):
    a = _student(container, "Анна", "Лебедева", "G1", student_id="101")
    session = container.attendance_service.create_session(
        discipline="Алгебра", group="G1", date=date(2024, 9, 2)
    )
    container.attendance_service.update_attendance(session.id, a.id, AttendanceStatus.ABSENT, "Болезнь")

    lines = container.attendance_service.export_session_csv(session.id).splitlines()

    assert lines == [
        "date,discipline,group,full_name,student_id,status,reason",
        "2024-09-02,Алгебра,G1,Анна Лебедева,101,absent,Болезнь",
    ]


def test_export_unknown_session_raises(container):
    with pytest.raises(ValidationError):
        container.attendance_service.export_session_csv("missing")
