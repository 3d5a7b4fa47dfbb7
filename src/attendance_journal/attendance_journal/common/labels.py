"""Display labels and badge classes used by the templates."""

from ..core.enums import AttendanceStatus, Role, StudentStatus

ROLE_LABELS = {
    Role.ADMIN: "Администратор",
    Role.STUDENT: "Студент",
}

STUDENT_STATUS_LABELS = {
    StudentStatus.ACTIVE: "Активен",
    StudentStatus.ACADEMIC_LEAVE: "Академ. отпуск",
    StudentStatus.EXPELLED: "Архив",
}

STUDENT_STATUS_CSS = {
    StudentStatus.ACTIVE: "bg-success",
    StudentStatus.ACADEMIC_LEAVE: "bg-warning text-dark",
    StudentStatus.EXPELLED: "bg-secondary",
}

ATTENDANCE_STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Присутствовал",
    AttendanceStatus.ABSENT: "Отсутствовал",
    AttendanceStatus.LATE: "Опоздал",
}

ATTENDANCE_STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.ABSENT: "bg-danger",
    AttendanceStatus.LATE: "bg-warning text-dark",
}


def template_globals() -> dict:
    return {
        "Role": Role,
        "StudentStatus": StudentStatus,
        "AttendanceStatus": AttendanceStatus,
        "role_labels": ROLE_LABELS,
        "student_status_labels": STUDENT_STATUS_LABELS,
        "student_status_css": STUDENT_STATUS_CSS,
        "attendance_status_labels": ATTENDANCE_STATUS_LABELS,
        "attendance_status_css": ATTENDANCE_STATUS_CSS,
    }
