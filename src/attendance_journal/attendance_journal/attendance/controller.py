from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.guards import admin_required, current_user, student_required
from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/sessions", methods=["POST"], endpoint="create_session")
    @admin_required
    def create_session():
        try:
            raw_date = request.form.get("date", "").strip()
            try:
                session_date = parse_iso_date(raw_date) if raw_date else None
            except ValueError:
                raise ValidationError("Дата должна быть в формате ГГГГ-ММ-ДД")

            session = container.attendance_service.create_session(
                discipline=request.form.get("discipline", ""),
                group=request.form.get("group", ""),
                date=session_date,
                timeslot=request.form.get("timeslot", ""),
                instructor=request.form.get("instructor") or None,
                notes=request.form.get("notes") or None,
            )
            flash(f"Занятие создано, студентов в списке: {len(session.records)}", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("create session failed")
            flash("Ошибка при создании занятия", "danger")
        return redirect(url_for("admin_console") + "#sessions")

    @app.route("/admin/sessions/<session_id>/delete", methods=["POST"], endpoint="delete_session")
    @admin_required
    def delete_session(session_id: str):
        if container.attendance_service.delete_session(session_id):
            flash("Занятие удалено", "success")
        else:
            flash("Занятие не найдено", "warning")
        return redirect(url_for("admin_console") + "#sessions")

    @app.route("/admin/sessions/<session_id>/attendance", methods=["POST"], endpoint="update_attendance")
    @admin_required
    def update_attendance(session_id: str):
        try:
            container.attendance_service.update_attendance(
                session_id,
                request.form.get("student_id", ""),
                request.form.get("status", ""),
                request.form.get("reason", "").strip() or None,
            )
        except ValidationError as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_console") + f"#session-{session_id}")

    @app.route("/admin/sessions/<session_id>/export", methods=["GET"], endpoint="export_session")
    @admin_required
    def export_session(session_id: str):
        try:
            text = container.attendance_service.export_session_csv(session_id)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_console"))

        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=session_{session_id}.csv"},
        )

    @app.route("/me", endpoint="student_dashboard")
    @student_required
    def student_dashboard():
        user = current_user()
        profile = container.attendance_service.find_profile(user)
        records = container.attendance_service.personal_history(profile) if profile else []
        return render_template(
            "student/dashboard.html",
            profile=profile,
            records=records,
            stats=container.attendance_service.personal_stats(records),
            active_page="student_dashboard",
        )
