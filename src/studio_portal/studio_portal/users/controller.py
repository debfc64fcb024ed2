from __future__ import annotations

from datetime import timedelta

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.authz import admin_required, current_user, login_required, sign_in, sign_out
from ..common.validators import get_field_validation
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, AuthorizationError, SessionExpiredError, ValidationError


def _safe_next(target: str | None) -> str | None:
    # Only same-site paths.
    if target and target.startswith("/") and target[1:2] not in ("/", "\\"):
        return target
    return None


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    @app.route("/login", methods=["GET", "POST"])
    def login():
        if current_user() is not None:
            return redirect(url_for("projects"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                user = container.auth_service.login(username, password)
                sign_in(user, remember=remember)
                app.permanent_session_lifetime = timedelta(days=7)
                flash(f"Welcome back, {user.display_name}!", "success")
                return redirect(_safe_next(request.args.get("next")) or url_for("projects"))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except Exception:
                app.logger.exception("Login failed for %s", username)
                flash("Login failed. Please try again.", "danger")

        return render_template("login.html", username=request.form.get("username", ""))

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        user = current_user()
        if user is not None:
            container.auth_service.logout(user)
        sign_out()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/profile", endpoint="profile")
    @login_required
    def profile():
        try:
            details = container.auth_service.profile(g.actor)
        except SessionExpiredError:
            raise
        except ApiError as e:
            flash(e.message, "warning")
            details = None
        return render_template("profile.html", user=g.actor, details=details, active_page="profile")

    @app.route("/admin/users", endpoint="admin_users")
    @admin_required
    def admin_users():
        users = []
        try:
            users = container.user_service.list_users(g.actor)
        except SessionExpiredError:
            raise
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return render_template("admin/users.html", users=users, roles=list(Role), active_page="admin_users")

    @app.route("/admin/users/<int:user_id>", endpoint="admin_user_details")
    @admin_required
    def admin_user_details(user_id: int):
        try:
            user = container.user_service.get_user(g.actor, user_id)
        except SessionExpiredError:
            raise
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_users"))
        return render_template("admin/user_details.html", user=user, active_page="admin_users")

    @app.route("/admin/users/create", methods=["GET", "POST"], endpoint="admin_create_user")
    @admin_required
    def admin_create_user():
        if request.method == "POST":
            try:
                container.user_service.create_user(g.actor, request.form)
                flash("User created successfully!", "success")
                return redirect(url_for("admin_users"))
            except SessionExpiredError:
                raise
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template("admin/user_form.html", form=request.form, roles=list(Role), user=None, active_page="admin_users")

    @app.route("/admin/users/<int:user_id>/edit", methods=["GET", "POST"], endpoint="admin_edit_user")
    @admin_required
    def admin_edit_user(user_id: int):
        try:
            user = container.user_service.get_user(g.actor, user_id)
        except SessionExpiredError:
            raise
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_users"))

        if request.method == "POST":
            try:
                container.user_service.update_user(g.actor, user_id, request.form)
                flash("User updated successfully!", "success")
                return redirect(url_for("admin_user_details", user_id=user_id))
            except SessionExpiredError:
                raise
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        form = request.form if request.method == "POST" else {
            "name": user.name,
            "email": user.email,
            "designation": user.designation,
            "specialization": user.specialization,
            "bio": user.bio,
            "role": user.primary_role,
        }
        return render_template("admin/user_form.html", form=form, roles=list(Role), user=user, active_page="admin_users")

    @app.route("/admin/users/<int:user_id>/change-password", methods=["POST"], endpoint="admin_change_password")
    @admin_required
    def admin_change_password(user_id: int):
        try:
            container.user_service.change_password(g.actor, user_id, request.form.get("newPassword"))
            flash("Password changed successfully!", "success")
        except SessionExpiredError:
            raise
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<int:user_id>/toggle-status", methods=["POST"], endpoint="admin_toggle_user")
    @admin_required
    def admin_toggle_user(user_id: int):
        enabled = request.form.get("enabled") == "true"
        try:
            container.user_service.set_enabled(g.actor, user_id, enabled)
            flash("User enabled." if enabled else "User disabled.", "success")
        except SessionExpiredError:
            raise
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/register", methods=["GET", "POST"], endpoint="admin_register_user")
    @admin_required
    def admin_register_user():
        errors: dict[str, str] = {}
        if request.method == "POST":
            try:
                errors = container.registration_service.register(g.actor, request.form)
                if not errors:
                    flash("User registered successfully!", "success")
                    return redirect(url_for("admin_users"))
            except SessionExpiredError:
                raise
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template(
            "admin/register.html",
            form=request.form,
            errors=errors,
            roles=list(Role),
            active_page="admin_register_user",
        )

    @app.route("/admin/register/validate", methods=["POST"], endpoint="validate_registration_field")
    @admin_required
    def validate_registration_field():
        """Per-field check used while the registration form is being filled in."""
        field_name = request.form.get("field", "")
        result = get_field_validation(field_name, request.form.get("value"), request.form)
        return {"field": field_name, "isValid": result.is_valid, "message": result.message}
