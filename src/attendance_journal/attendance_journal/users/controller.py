from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.guards import current_user, login_required
from ..common.labels import template_globals
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User

logger = logging.getLogger(__name__)


def _parse_role(value: str, default: Role) -> Role:
    try:
        return Role(value or default.value)
    except ValueError:
        raise ValidationError("Неизвестная роль")


def _sign_in(user: User, *, stay_signed_in: bool) -> None:
    session.clear()
    session.permanent = stay_signed_in
    session["user_id"] = user.user_id


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=7)
    app.jinja_env.globals["csrf_token"] = lambda: ""
    app.jinja_env.globals.update(template_globals())

    @app.context_processor
    def inject_current_user():
        return {"current_user": current_user()}

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        form = {"email": "", "role": Role.ADMIN.value, "stay_signed_in": True}
        if request.method == "POST":
            form = {
                "email": request.form.get("email", ""),
                "role": request.form.get("role", Role.ADMIN.value),
                "stay_signed_in": bool(request.form.get("stay_signed_in")),
            }
            try:
                user = container.auth_service.authenticate(
                    form["email"],
                    request.form.get("password", ""),
                    _parse_role(form["role"], Role.ADMIN),
                )
                _sign_in(user, stay_signed_in=form["stay_signed_in"])
                logger.info("user %s signed in (stay_signed_in=%s)", user.user_id, form["stay_signed_in"])
                return redirect(url_for("dashboard"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("login failed")
                flash("Ошибка авторизации", "danger")

        return render_template("login.html", form=form)

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_view():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        form = {"role": Role.STUDENT.value, "full_name": "", "email": "", "group": "", "student_id": ""}
        if request.method == "POST":
            form = {key: request.form.get(key, "") for key in form}
            try:
                user = container.auth_service.create_account(
                    full_name=form["full_name"],
                    email=form["email"],
                    password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                    role=_parse_role(form["role"], Role.STUDENT),
                    group=form["group"],
                    student_id=form["student_id"],
                )
                _sign_in(user, stay_signed_in=True)
                flash("Регистрация завершена", "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("registration failed")
                flash("Не удалось зарегистрироваться", "danger")

        return render_template("register.html", form=form)

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("Вы вышли из системы", "info")
        return redirect(url_for("login"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        if current_user().role == Role.ADMIN:
            return redirect(url_for("admin_console"))
        return redirect(url_for("student_dashboard"))
