from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import today_local
from ..common.guards import admin_required
from ..container import Container
from ..core.constants import DEFAULT_TIMESLOT
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError
from .service import STATUS_FILTER_ALL

logger = logging.getLogger(__name__)


def _parse_status(value: str) -> StudentStatus:
    try:
        return StudentStatus(value or StudentStatus.ACTIVE.value)
    except ValueError:
        raise ValidationError("Неизвестный статус студента")


def _student_form() -> dict:
    return {
        "first_name": request.form.get("first_name", ""),
        "last_name": request.form.get("last_name", ""),
        "email": request.form.get("email", ""),
        "student_id": request.form.get("student_id", ""),
        "group": request.form.get("group", ""),
        "status": _parse_status(request.form.get("status", "")),
        "note": request.form.get("note", ""),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/admin", endpoint="admin_console")
    @admin_required
    def admin_console():
        query = request.args.get("q", "")
        status = request.args.get("status", STATUS_FILTER_ALL)
        try:
            students = container.student_service.filter_students(query, status)
        except ValueError:
            status = STATUS_FILTER_ALL
            students = container.student_service.filter_students(query)

        editing = None
        if request.args.get("edit"):
            editing = container.student_service.get_student(request.args["edit"])

        sessions = [
            (s, container.attendance_service.session_rows(s))
            for s in container.attendance_service.list_sessions()
        ]
        return render_template(
            "admin/dashboard.html",
            overview=container.attendance_service.overview(),
            students=students,
            groups=container.student_service.list_groups(),
            sessions=sessions,
            query=query,
            status_filter=status,
            editing=editing,
            today=today_local().isoformat(),
            default_timeslot=DEFAULT_TIMESLOT,
            active_page="admin_console",
        )

    @app.route("/admin/students", methods=["POST"], endpoint="add_student")
    @admin_required
    def add_student():
        try:
            container.student_service.add_student(**_student_form())
            flash("Студент добавлен", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("add student failed")
            flash("Ошибка при добавлении студента", "danger")
        return redirect(url_for("admin_console"))

    @app.route("/admin/students/<profile_id>/edit", methods=["POST"], endpoint="update_student")
    @admin_required
    def update_student(profile_id: str):
        try:
            container.student_service.update_student(profile_id, **_student_form())
            flash("Профиль обновлён", "success")
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_console", edit=profile_id))
        except Exception:
            logger.exception("update student failed")
            flash("Ошибка при сохранении профиля", "danger")
        return redirect(url_for("admin_console"))

    @app.route("/admin/students/<profile_id>/delete", methods=["POST"], endpoint="delete_student")
    @admin_required
    def delete_student(profile_id: str):
        if container.student_service.delete_student(profile_id):
            flash("Студент удалён", "success")
        else:
            flash("Студент не найден", "warning")
        return redirect(url_for("admin_console"))

    @app.route("/admin/students/bulk", methods=["POST"], endpoint="bulk_students")
    @admin_required
    def bulk_students():
        ids = request.form.getlist("ids")
        action = request.form.get("action", "")
        if not ids:
            flash("Выберите студентов в таблице", "warning")
            return redirect(url_for("admin_console"))

        try:
            if action == "delete":
                count = container.student_service.bulk_delete_students(ids)
                flash(f"Удалено студентов: {count}", "success")
            elif action.startswith("status:"):
                status = _parse_status(action.split(":", 1)[1])
                count = container.student_service.bulk_update_students(ids, status=status)
                flash(f"Обновлено студентов: {count}", "success")
            else:
                flash("Неизвестное действие", "warning")
        except ValidationError as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_console"))

    @app.route("/admin/students/import", methods=["POST"], endpoint="import_students")
    @admin_required
    def import_students():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            flash("Выберите CSV-файл", "warning")
            return redirect(url_for("admin_console"))

        try:
            text = upload.read().decode("utf-8-sig")
            created = container.student_service.import_csv(text)
            flash(f"Импортировано {created} студентов", "success")
        except UnicodeDecodeError:
            flash("Файл должен быть в кодировке UTF-8", "danger")
        except ValidationError as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_console"))
