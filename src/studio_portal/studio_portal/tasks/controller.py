from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.authz import login_required
from ..common.pagination import page_arg
from ..container import Container
from ..core.enums import ProjectStage, TaskStatus
from ..core.exceptions import ApiError, SessionExpiredError, ValidationError
from .service import TaskTabs


def register(app: Flask, container: Container) -> None:
    @app.route("/tasks", endpoint="my_tasks")
    @login_required
    def my_tasks():
        pages = {name: page_arg(request.args, f"{name}_page") for name in TaskTabs.NAMES}
        tabs = container.task_service.my_tasks(
            g.actor, active=request.args.get("tab", "assigned"), page=page_arg(request.args), pages=pages
        )
        return render_template("tasks/my_tasks.html", tabs=tabs, user=g.actor, active_page="my_tasks")

    @app.route("/tasks/<int:task_id>/details", endpoint="task_details")
    @login_required
    def task_details(task_id: int):
        try:
            task = container.task_service.get_details(g.actor, task_id)
        except SessionExpiredError:
            raise
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("my_tasks"))
        except ApiError:
            flash("Failed to load task details", "danger")
            return redirect(url_for("my_tasks"))

        logs = []
        try:
            logs = container.timelog_service.list_for_task(g.actor, task_id)
        except SessionExpiredError:
            raise
        except ApiError as e:
            app.logger.warning("Time logs for task %s unavailable: %s", task_id, e.message)

        return render_template(
            "tasks/details.html",
            task=task,
            logs=logs,
            total_hours=container.timelog_service.total_hours(logs),
            can_edit=task.can_edit(g.actor),
            active_page="my_tasks",
        )

    @app.route("/projects/<int:project_id>/tasks/new", methods=["GET", "POST"], endpoint="task_create")
    @login_required
    def task_create(project_id: int):
        if request.method == "POST":
            try:
                container.task_service.create(g.actor, project_id, request.form)
                flash("Task created successfully!", "success")
                return redirect(url_for("project_details", project_id=project_id))
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                flash(e.detail or "Failed to create task", "danger")

        return render_template(
            "tasks/form.html",
            form=request.form,
            project_id=project_id,
            task_id=None,
            stages=list(ProjectStage),
            statuses=list(TaskStatus),
            active_page="projects",
        )

    @app.route("/tasks/<int:task_id>/edit", methods=["GET", "POST"], endpoint="task_edit")
    @login_required
    def task_edit(task_id: int):
        if request.method == "POST":
            try:
                container.task_service.update(g.actor, task_id, request.form)
                flash("Task updated successfully!", "success")
                return redirect(url_for("task_details", task_id=task_id))
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                flash(e.detail or "Failed to update task", "danger")
            form = request.form
        else:
            try:
                form = container.task_service.get_details(g.actor, task_id).form_values()
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
                return redirect(url_for("my_tasks"))
            except ApiError:
                flash("Failed to load task", "danger")
                return redirect(url_for("my_tasks"))

        return render_template(
            "tasks/form.html",
            form=form,
            project_id=None,
            task_id=task_id,
            stages=list(ProjectStage),
            statuses=list(TaskStatus),
            active_page="my_tasks",
        )
