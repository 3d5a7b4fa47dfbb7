from __future__ import annotations

from functools import wraps

from flask import current_app, flash, redirect, render_template, session, url_for

from ..core.enums import Role


def _container():
    return current_app.extensions["journal"]


def current_user():
    """The account signed in by this client's session cookie, if it still exists."""
    return _container().auth_service.get_user(session.get("user_id"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            flash("Пожалуйста, войдите в систему", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return redirect(url_for("login"))
            if user.role != role:
                return render_template("403.html", current_user=user), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
student_required = role_required(Role.STUDENT)
