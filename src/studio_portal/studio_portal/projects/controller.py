from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.authz import admin_required, login_required
from ..common.pagination import page_arg
from ..container import Container
from ..core.enums import ProjectCategory, ProjectPriority, ProjectStage, ProjectStatus
from ..core.exceptions import ApiError, AuthorizationError, SessionExpiredError, ValidationError
from .model import ProjectFilters


def _choices() -> dict:
    return {
        "categories": list(ProjectCategory),
        "statuses": list(ProjectStatus),
        "stages": list(ProjectStage),
        "priorities": list(ProjectPriority),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/projects", endpoint="projects")
    @login_required
    def projects():
        filters = ProjectFilters.from_args(request.args)
        listing = container.project_service.list_projects(g.actor, page=page_arg(request.args), filters=filters)
        return render_template(
            "projects/list.html",
            listing=listing,
            filters=filters,
            active_page="projects",
            **_choices(),
        )

    @app.route("/projects/<int:project_id>/details", endpoint="project_details")
    @login_required
    def project_details(project_id: int):
        try:
            details = container.project_service.get_details(g.actor, project_id)
        except SessionExpiredError:
            raise
        except (ValidationError, ApiError) as e:
            flash(str(e), "danger")
            return redirect(url_for("projects"))
        return render_template("projects/details.html", details=details, active_page="projects")

    @app.route("/projects/create", methods=["GET", "POST"], endpoint="project_create")
    @login_required
    def project_create():
        if request.method == "POST":
            try:
                project_id = container.project_service.create(g.actor, request.form)
                flash("Project created successfully!", "success")
                if project_id:
                    return redirect(url_for("project_details", project_id=project_id))
                return redirect(url_for("projects"))
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                app.logger.warning("Project create failed: %s", e.message)
                flash(e.detail or "Failed to create project", "danger")

        return render_template("projects/form.html", form=request.form, project_id=None, active_page="projects", **_choices())

    @app.route("/projects/<int:project_id>/edit", methods=["GET", "POST"], endpoint="project_edit")
    @admin_required
    def project_edit(project_id: int):
        if request.method == "POST":
            try:
                container.project_service.update(g.actor, project_id, request.form)
                flash("Project updated successfully!", "success")
                return redirect(url_for("project_details", project_id=project_id))
            except SessionExpiredError:
                raise
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except ApiError as e:
                app.logger.warning("Project %s update failed: %s", project_id, e.message)
                flash(e.detail or "Failed to update project", "danger")
            form = request.form
        else:
            try:
                form = container.project_service.get_for_edit(g.actor, project_id).form_values()
            except SessionExpiredError:
                raise
            except ValidationError as e:
                flash(str(e), "danger")
                return redirect(url_for("projects"))
            except ApiError:
                flash("Failed to load project", "danger")
                return redirect(url_for("projects"))

        return render_template(
            "projects/form.html", form=form, project_id=project_id, active_page="projects", **_choices()
        )

    @app.route("/projects/<int:project_id>/delete", methods=["POST"], endpoint="project_delete")
    @admin_required
    def project_delete(project_id: int):
        filters = ProjectFilters.from_args(request.form)
        try:
            listing = container.project_service.delete(
                g.actor, project_id, page=page_arg(request.form), filters=filters
            )
            flash("Project deleted successfully!", "success")
            page = listing.pagination.current_page
        except SessionExpiredError:
            raise
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
            page = page_arg(request.form)
        return redirect(url_for("projects", page=page, **{k: v for k, v in filters.as_params().items() if v}))
