from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.authz import login_required
from ..common.datetime_utils import today_local
from ..container import Container
from ..core.exceptions import ApiError, SessionExpiredError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/tasks/<int:task_id>/timelog", methods=["GET", "POST"], endpoint="timelog_create")
    @login_required
    def timelog_create(task_id: int):
        form = {"hoursWorked": "", "description": "", "dateLogged": today_local().isoformat()}
        if request.method == "POST":
            form.update(request.form.to_dict())
            try:
                container.timelog_service.log_time(g.actor, task_id, request.form)
                flash("Time logged successfully!", "success")
                return redirect(url_for("task_details", task_id=task_id))
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                app.logger.warning("Logging time on task %s failed: %s", task_id, e.message)
                flash(e.detail or "Failed to log time. Please try again.", "danger")

        return render_template("timelogs/form.html", form=form, task_id=task_id, active_page="my_tasks")

    @app.route("/tasks/<int:task_id>/timelogs", endpoint="timelog_list")
    @login_required
    def timelog_list(task_id: int):
        logs = container.timelog_service.list_for_task(g.actor, task_id)
        return render_template(
            "timelogs/list.html",
            logs=logs,
            total_hours=container.timelog_service.total_hours(logs),
            task_id=task_id,
            active_page="my_tasks",
        )
