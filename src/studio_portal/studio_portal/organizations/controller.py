from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import ValidationError
from .service import REGISTERED_MESSAGE


def register(app: Flask, container: Container) -> None:
    @app.route("/organization/register", methods=["GET", "POST"], endpoint="organization_register")
    def organization_register():
        step = 1
        if request.method == "POST":
            step = 2 if request.form.get("step") == "2" else 1
            try:
                if step == 1:
                    container.organization_service.check_organization_step(request.form)
                    step = 2
                else:
                    container.organization_service.register(request.form)
                    flash(REGISTERED_MESSAGE, "success")
                    return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")

        return render_template("organization/register.html", form=request.form, step=step)
