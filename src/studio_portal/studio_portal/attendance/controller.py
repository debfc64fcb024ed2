from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.authz import admin_required
from ..container import Container
from ..core.exceptions import ApiError, AuthorizationError, SessionExpiredError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/users/<int:user_id>/attendance", endpoint="user_attendance")
    @admin_required
    def user_attendance(user_id: int):
        try:
            month = container.attendance_service.month(
                g.actor,
                user_id,
                year=request.args.get("year", type=int),
                month=request.args.get("month", type=int),
            )
        except SessionExpiredError:
            raise
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_user_details", user_id=user_id))
        except ApiError as e:
            app.logger.warning("Attendance for user %s unavailable: %s", user_id, e.message)
            flash("Failed to fetch attendance data", "danger")
            return redirect(url_for("admin_user_details", user_id=user_id))

        return render_template(
            "admin/attendance.html",
            user_id=user_id,
            calendar=month,
            stats=month.stats(),
            active_page="admin_users",
        )
